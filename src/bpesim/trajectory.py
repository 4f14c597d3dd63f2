"""Immutable records describing a completed merge run."""

from collections.abc import Iterator
from dataclasses import dataclass
from functools import cached_property
from typing import Any

from ._sanitise import render_symbol
from .stats import Statistics, compute_statistics
from .types import Symbol, SymbolPair, SymbolSequence, Vocabulary


@dataclass(frozen=True)
class MergeRule:
    """One learned merge: ``left`` + ``right`` became ``result``."""

    left: Symbol
    right: Symbol
    result: Symbol

    @property
    def pair(self) -> SymbolPair:
        return (self.left, self.right)

    def to_dict(self) -> dict[str, str]:
        return {"left": self.left, "right": self.right, "result": self.result}

    def __str__(self) -> str:
        return (
            f"[{render_symbol(self.left)}][{render_symbol(self.right)}] "
            f"-> {render_symbol(self.result)}"
        )


@dataclass(frozen=True)
class Step:
    """
    Snapshot of the simulator state after ``iteration`` merges.

    Step 0 is the preprocessed input: no chosen pair, frequency 0, and no pair
    counts. Every later step holds the counts of the pass that chose its pair.
    """

    iteration: int
    chosen_pair: SymbolPair | None
    frequency: int
    vocabulary: Vocabulary
    sequence: SymbolSequence
    rules: tuple[MergeRule, ...]
    compression_ratio: float
    pair_frequencies: tuple[tuple[SymbolPair, int], ...] = ()

    @property
    def new_symbol(self) -> Symbol | None:
        """Symbol created at this step, ``None`` for step 0."""
        if self.chosen_pair is None:
            return None
        return self.vocabulary[-1]

    def to_dict(self) -> dict[str, Any]:
        """Return the step as plain lists, strings and numbers."""
        return {
            "iteration": self.iteration,
            "chosen_pair": list(self.chosen_pair) if self.chosen_pair else None,
            "frequency": self.frequency,
            "vocabulary": list(self.vocabulary),
            "sequence": list(self.sequence),
            "rules": [rule.to_dict() for rule in self.rules],
            "compression_ratio": self.compression_ratio,
            "pair_frequencies": [
                [left, right, n] for (left, right), n in self.pair_frequencies
            ],
        }


@dataclass(frozen=True)
class Trajectory:
    """
    Ordered steps 0..N of one merge run, N being the merges performed.

    Produced once by the engine and never mutated; callers step through it by
    index.
    """

    steps: tuple[Step, ...]
    max_vocab_size: int
    source_length: int
    seed_size: int

    def __len__(self) -> int:
        return len(self.steps)

    def __getitem__(self, index: int) -> Step:
        return self.steps[index]

    def __iter__(self) -> Iterator[Step]:
        return iter(self.steps)

    @property
    def final_step(self) -> Step:
        return self.steps[-1]

    @property
    def final_sequence(self) -> SymbolSequence:
        return self.steps[-1].sequence

    @property
    def final_vocabulary(self) -> Vocabulary:
        return self.steps[-1].vocabulary

    @property
    def n_merges(self) -> int:
        return len(self.steps) - 1

    @property
    def rules(self) -> tuple[MergeRule, ...]:
        return self.steps[-1].rules

    def learned_symbols(self, index: int = -1) -> Vocabulary:
        """Vocabulary entries at step ``index`` that came from merges."""
        return self.steps[index].vocabulary[self.seed_size :]

    def compression_history(self) -> list[float]:
        """Compression ratio recorded at every step."""
        return [step.compression_ratio for step in self.steps]

    @cached_property
    def statistics(self) -> Statistics:
        return compute_statistics(self)

    def to_dict(self) -> dict[str, Any]:
        """Return the trajectory and its statistics as plain data."""
        return {
            "max_vocab_size": self.max_vocab_size,
            "source_length": self.source_length,
            "seed_size": self.seed_size,
            "steps": [step.to_dict() for step in self.steps],
            "statistics": self.statistics.to_dict(),
        }
