"""
Core Byte Pair Encoding (BPE) operations on symbol sequences.
"""

from collections import Counter
from collections.abc import Sequence

from .types import Symbol, SymbolPair
from .variant import CONTINUATION_PREFIX, WordBoundaryStyle


def pair_freqs(symbols: Sequence[Symbol]) -> Counter[SymbolPair]:
    """
    Count every adjacent ordered pair in one left-to-right pass.

    Keys are 2-tuples, so a symbol containing any separator text cannot collide
    with a different pair. Counter keeps first-seen order, which the ranking
    relies on for equal-length ties.
    """
    return Counter(zip(symbols, symbols[1:]))


def rank_candidates(freqs: Counter[SymbolPair]) -> list[SymbolPair]:
    """
    Return the pairs tied at the highest frequency, best first.

    Shorter concatenated surface length wins; pairs of equal length keep the
    order in which they were first seen.
    """
    if not freqs:
        return []
    top = max(freqs.values())
    tied = [pair for pair, n in freqs.items() if n == top]
    # sorted() is stable, so first-seen order survives among equal lengths
    return sorted(tied, key=lambda pair: len(pair[0]) + len(pair[1]))


def merge_symbol(
    pair: SymbolPair,
    boundary_style: WordBoundaryStyle = WordBoundaryStyle.SUFFIX_MARKER,
    continuation_prefix: str = CONTINUATION_PREFIX,
) -> Symbol:
    """
    Build the symbol produced by merging ``pair``.

    Under WordPiece-style prefix marking, a right symbol carrying the
    continuation prefix loses it, so ``c`` + ``##a`` gives ``ca``.
    """
    left, right = pair
    if (
        boundary_style == WordBoundaryStyle.PREFIX_MARKER
        and right.startswith(continuation_prefix)
    ):
        right = right[len(continuation_prefix) :]
    return left + right


def bpe_merge(
    symbols: Sequence[Symbol], target: SymbolPair, new_sym: Symbol
) -> tuple[list[Symbol], int]:
    """
    Merge all non-overlapping occurrences of ``target`` into ``new_sym``.

    Occurrences are consumed greedily left to right, so merging ``(a, a)`` in
    ``a a a`` yields ``aa a``.

    :returns: The new sequence and the number of occurrences merged.
    """
    merged: list[Symbol] = []
    n_merged = 0

    i = 0
    n = len(symbols)
    while i < n:
        # check if we can form a pair and it matches the target
        if i < n - 1 and symbols[i] == target[0] and symbols[i + 1] == target[1]:
            merged.append(new_sym)
            n_merged += 1
            i += 2
        else:
            merged.append(symbols[i])
            i += 1

    return merged, n_merged
