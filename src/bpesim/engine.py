"""Merge engine: learn BPE merges and record every intermediate state."""

import logging
from collections.abc import Sequence
from typing import Final

from ._merge import bpe_merge, merge_symbol, pair_freqs, rank_candidates
from ._sanitise import render_pair, render_symbol
from .errors import InvalidBudgetError
from .stats import compression_ratio
from .trajectory import MergeRule, Step, Trajectory
from .types import Symbol, SymbolPair
from .variant import CONTINUATION_PREFIX, WordBoundaryStyle

# hard cap on merges per run, independent of the vocabulary budget
MAX_MERGES: Final[int] = 100

log = logging.getLogger(__name__)


def check_budget(max_vocab_size: object) -> int:
    """
    Validate a vocabulary budget.

    :raises InvalidBudgetError: If ``max_vocab_size`` is not an integer >= 1.
    """
    # bool is an int subclass but never a meaningful budget
    if (
        not isinstance(max_vocab_size, int)
        or isinstance(max_vocab_size, bool)
        or max_vocab_size < 1
    ):
        raise InvalidBudgetError(
            "vocab size must be a positive integer", max_vocab_size=max_vocab_size
        )
    return max_vocab_size


def run(
    sequence: Sequence[Symbol],
    vocabulary: Sequence[Symbol],
    max_vocab_size: int,
    rules: Sequence[MergeRule] = (),
    *,
    boundary_style: WordBoundaryStyle | str = WordBoundaryStyle.SUFFIX_MARKER,
    continuation_prefix: str = CONTINUATION_PREFIX,
    source_length: int | None = None,
    verbose: bool = False,
) -> Trajectory:
    """
    Run BPE merges from a prepared state and return the full trajectory.

    Each iteration counts adjacent pairs, picks the most frequent one (ties go
    to the shortest concatenation, then to the pair seen first), merges every
    non-overlapping occurrence and records a new step. The run stops when no
    pair occurs at least twice, when the vocabulary reaches ``max_vocab_size``,
    after ``min(max_vocab_size - len(vocabulary), MAX_MERGES)`` merges, or when
    every top candidate would recreate a symbol already in the vocabulary.

    A budget at or below the seed vocabulary size is not an error: the
    trajectory then holds step 0 only.

    :param sequence: Initial symbol sequence.
    :param vocabulary: Seed vocabulary; symbols of ``sequence`` it lacks are
        appended in first-seen order.
    :param max_vocab_size: Target vocabulary size.
    :param rules: Merge rules learned before this run, kept as a prefix of each
        step's rule list.
    :param boundary_style: Boundary style of the variant, for merge naming.
    :param continuation_prefix: Prefix stripped under prefix-marker merges.
    :param source_length: Length of the original text, used for compression
        ratios. Defaults to the initial sequence length.
    :param verbose: Log each learned merge when ``True``.
    :returns: Trajectory with steps 0..N.
    :raises InvalidBudgetError: If ``max_vocab_size`` is not an integer >= 1.
    """
    check_budget(max_vocab_size)
    boundary_style = WordBoundaryStyle.get(boundary_style)

    symbols: list[Symbol] = list(sequence)
    # sequence symbols missing from the given vocabulary are appended to it
    vocab: list[Symbol] = list(dict.fromkeys([*vocabulary, *symbols]))
    if len(vocab) > len(set(vocabulary)):
        log.debug(
            f"added {len(vocab) - len(set(vocabulary))} sequence symbols "
            "missing from the seed vocabulary"
        )
    known: set[Symbol] = set(vocab)
    learned: list[MergeRule] = list(rules)
    if source_length is None:
        source_length = len(symbols)

    steps: list[Step] = [
        Step(
            iteration=0,
            chosen_pair=None,
            frequency=0,
            vocabulary=tuple(vocab),
            sequence=tuple(symbols),
            rules=tuple(learned),
            compression_ratio=compression_ratio(source_length, symbols),
        )
    ]

    seed_size = len(vocab)
    n_merges = min(max_vocab_size - seed_size, MAX_MERGES)
    if n_merges <= 0:
        log.warning(
            f"vocab size {max_vocab_size} leaves no room for merges "
            f"(seed vocabulary has {seed_size} symbols)"
        )

    iteration = 0
    while iteration < n_merges:
        freqs = pair_freqs(symbols)
        if not freqs:
            log.debug("no adjacent pairs left")
            break

        candidates = rank_candidates(freqs)
        freq = freqs[candidates[0]]
        if freq < 2:
            log.debug(f"most frequent pair occurs once, stopping at {iteration}")
            break

        if len(vocab) >= max_vocab_size:
            break

        choice = _first_new(candidates, known, boundary_style, continuation_prefix)
        if choice is None:
            log.warning(
                f"every pair at frequency {freq} recreates a known symbol, "
                f"stopping at {iteration}"
            )
            break
        pair, new_sym = choice

        symbols, n_merged = bpe_merge(symbols, pair, new_sym)
        vocab.append(new_sym)
        known.add(new_sym)
        learned.append(MergeRule(left=pair[0], right=pair[1], result=new_sym))
        iteration += 1

        if verbose:
            log.info(
                "merge %d/%d: %s -> %s (%d occurrences)",
                iteration,
                n_merges,
                render_pair(pair),
                render_symbol(new_sym),
                n_merged,
            )

        steps.append(
            Step(
                iteration=iteration,
                chosen_pair=pair,
                frequency=freq,
                vocabulary=tuple(vocab),
                sequence=tuple(symbols),
                rules=tuple(learned),
                compression_ratio=compression_ratio(source_length, symbols),
                pair_frequencies=tuple(freqs.items()),
            )
        )

    if 0 < iteration < n_merges:
        log.debug(f"stopped early after {iteration} merges (allowed {n_merges})")

    return Trajectory(
        steps=tuple(steps),
        max_vocab_size=max_vocab_size,
        source_length=source_length,
        seed_size=seed_size,
    )


def _first_new(
    candidates: list[SymbolPair],
    known: set[Symbol],
    boundary_style: WordBoundaryStyle,
    continuation_prefix: str,
) -> tuple[SymbolPair, Symbol] | None:
    """Return the best candidate whose merged symbol is not yet known."""
    for pair in candidates:
        new_sym = merge_symbol(pair, boundary_style, continuation_prefix)
        if new_sym not in known:
            return pair, new_sym
    return None


__all__ = ["MAX_MERGES", "run", "check_budget"]
