"""Derived, read-only metrics over a finished trajectory."""

from collections import Counter
from collections.abc import Iterable, Sequence
from dataclasses import asdict, dataclass
from enum import Enum
from typing import TYPE_CHECKING

from .types import Symbol
from .variant import ModelVariant, WordBoundaryStyle

if TYPE_CHECKING:
    from .trajectory import Trajectory


@dataclass(frozen=True)
class Statistics:
    """
    Summary of a trajectory's final state.

    ``unique_symbols`` counts the distinct symbols of the step-0 sequence,
    marked forms included: ``</w>`` and each ``##x`` count on their own, so
    WordPiece "cat" gives 3 (``c``, ``##a``, ``##t``) rather than 1 bare
    character.
    """

    total_merges: int
    final_compression_ratio: float
    unique_symbols: int
    average_symbol_length: float
    vocabulary_efficiency: float

    def to_dict(self) -> dict[str, int | float]:
        return asdict(self)


class SymbolKind(str, Enum):
    """Coarse category of a symbol, as shown in token-type breakdowns."""

    SPECIAL = "special"
    # carries a word-boundary or continuation marker
    SUBWORD = "subword"
    REGULAR = "regular"


def compression_ratio(source_length: int, sequence: Sequence[Symbol]) -> float:
    """Characters of source text per symbol; 0.0 for an empty sequence."""
    if not sequence:
        return 0.0
    return source_length / len(sequence)


def size_reduction(ratio: float) -> float:
    """Fraction of symbols saved relative to one symbol per character."""
    if ratio <= 0:
        return 0.0
    return 1 - 1 / ratio


def average_symbol_length(sequence: Sequence[Symbol]) -> float:
    if not sequence:
        return 0.0
    return sum(len(sym) for sym in sequence) / len(sequence)


def compute_statistics(trajectory: "Trajectory") -> Statistics:
    """
    Summarise a trajectory.

    Every value is recomputed from the stored steps, so a deserialised or
    copied trajectory yields the same numbers.
    """
    final_sequence = trajectory.final_sequence
    return Statistics(
        total_merges=trajectory.n_merges,
        final_compression_ratio=compression_ratio(
            trajectory.source_length, final_sequence
        ),
        unique_symbols=len(set(trajectory.steps[0].sequence)),
        average_symbol_length=average_symbol_length(final_sequence),
        vocabulary_efficiency=len(trajectory.final_vocabulary)
        / trajectory.max_vocab_size,
    )


def classify_symbol(sym: Symbol, variant: ModelVariant) -> SymbolKind:
    """Classify ``sym`` as special, boundary-marked subword, or regular."""
    if sym in variant.special_tokens:
        return SymbolKind.SPECIAL
    match variant.word_boundary_style:
        case WordBoundaryStyle.SUFFIX_MARKER if variant.end_of_word in sym:
            return SymbolKind.SUBWORD
        case WordBoundaryStyle.PREFIX_MARKER if sym.startswith(
            variant.continuation_prefix
        ):
            return SymbolKind.SUBWORD
    return SymbolKind.REGULAR


def count_symbol_kinds(
    sequence: Iterable[Symbol], variant: ModelVariant
) -> Counter[SymbolKind]:
    """Count how many symbols of ``sequence`` fall into each kind."""
    return Counter(classify_symbol(sym, variant) for sym in sequence)


__all__ = [
    "Statistics",
    "SymbolKind",
    "compression_ratio",
    "size_reduction",
    "average_symbol_length",
    "compute_statistics",
    "classify_symbol",
    "count_symbol_kinds",
]
