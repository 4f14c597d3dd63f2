import pytest

import bpesim as bsim


@pytest.fixture
def scenario():
    """Trajectory of the classic low/lower/newest/widest example."""
    return bsim.compute("low lower newest widest", 20, "custom")
