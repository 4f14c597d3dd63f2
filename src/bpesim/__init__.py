"""bpesim: step-by-step Byte Pair Encoding training simulator."""

from .engine import MAX_MERGES, run
from .errors import BpeSimError, EmptyInputError, InvalidBudgetError, VariantError
from .preprocess import prepare
from .simulator import compare_variants, compute
from .stats import (
    Statistics,
    SymbolKind,
    classify_symbol,
    compute_statistics,
    count_symbol_kinds,
    size_reduction,
)
from .trajectory import MergeRule, Step, Trajectory
from .variant import ModelVariant, WordBoundaryStyle, get_variant, list_variants

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("bpesim")
except PackageNotFoundError:
    __version__ = "dev"

__all__ = [
    "compute",
    "compare_variants",
    "prepare",
    "run",
    "MAX_MERGES",
    "ModelVariant",
    "WordBoundaryStyle",
    "get_variant",
    "list_variants",
    "MergeRule",
    "Step",
    "Trajectory",
    "Statistics",
    "SymbolKind",
    "compute_statistics",
    "classify_symbol",
    "count_symbol_kinds",
    "size_reduction",
    "BpeSimError",
    "EmptyInputError",
    "InvalidBudgetError",
    "VariantError",
]
