"""Top-level entry points: preprocess, run the merge engine, return a trajectory."""

import logging
from collections.abc import Iterable

from ._decorators import measure_time
from .engine import run
from .preprocess import prepare
from .trajectory import Trajectory
from .variant import ModelVariant, get_variant, list_variants

log = logging.getLogger(__name__)


def _resolve(variant: ModelVariant | str) -> ModelVariant:
    if isinstance(variant, ModelVariant):
        return variant
    return get_variant(variant)


@measure_time
def compute(
    text: str,
    max_vocab_size: int | None = None,
    variant: ModelVariant | str = "custom",
    *,
    verbose: bool = False,
) -> Trajectory:
    """
    Compute the complete merge trajectory of ``text``.

    The result depends only on the arguments: identical inputs always give
    equal trajectories.

    :param text: Raw input text.
    :param max_vocab_size: Target vocabulary size. ``None`` uses the variant's
        default size.
    :param variant: A ``ModelVariant`` or the name of a built-in one.
    :param verbose: Log each learned merge when ``True``.
    :returns: Trajectory with one step per merge plus the initial step.
    :raises EmptyInputError: If the text contains no words.
    :raises InvalidBudgetError: If ``max_vocab_size`` is not an integer >= 1.
    :raises VariantError: If ``variant`` names no built-in variant.

    .. code-block:: python

        trajectory = compute("low lower newest widest", 20, "custom")
        for step in trajectory:
            print(step.iteration, step.chosen_pair, len(step.sequence))
    """
    model = _resolve(variant)
    if max_vocab_size is None:
        max_vocab_size = model.vocab_size_default

    sequence, vocabulary = prepare(text, model)
    return run(
        sequence,
        vocabulary,
        max_vocab_size,
        boundary_style=model.word_boundary_style,
        continuation_prefix=model.continuation_prefix,
        source_length=len(text),
        verbose=verbose,
    )


def compare_variants(
    text: str,
    variants: Iterable[ModelVariant | str] | None = None,
    max_vocab_size: int | None = None,
) -> dict[str, Trajectory]:
    """
    Run ``compute`` on the same text for several variants.

    :param text: Raw input text.
    :param variants: Variants or names to compare; defaults to every built-in
        variant except "custom".
    :param max_vocab_size: Shared budget; ``None`` gives each variant its default.
    :returns: Trajectories keyed by variant display name, in input order.
    """
    if variants is None:
        variants = [name for name in list_variants() if name != "custom"]

    results: dict[str, Trajectory] = {}
    for item in variants:
        model = _resolve(item)
        results[model.name] = compute(text, max_vocab_size, model)
        log.debug(f"{model.name}: {results[model.name].n_merges} merges")
    return results


__all__ = ["compute", "compare_variants"]
