"""Turn raw text into the initial symbol sequence and seed vocabulary."""

import logging

import regex as re

from .errors import EmptyInputError
from .types import Symbol, SymbolSequence, Vocabulary
from .variant import ModelVariant, WordBoundaryStyle

log = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")
_PUNCTUATION = re.compile(r"[^\w\s]")


def normalise(text: str, variant: ModelVariant) -> str:
    """Apply the variant's casing, punctuation and separator rules to ``text``."""
    if variant.lowercase:
        text = text.lower()
    if variant.strip_punctuation:
        text = _PUNCTUATION.sub(" ", text)
    if variant.word_separator is not None:
        sep = variant.word_separator
        text = _WHITESPACE.sub(sep, text)
        # only the leading separator is dropped, a trailing one stays a symbol
        if text.startswith(sep):
            text = text[len(sep) :]
    return text


def split_words(text: str) -> list[str]:
    """Split on whitespace runs and drop empty words."""
    return [word for word in _WHITESPACE.split(text) if word]


def word_symbols(word: str, variant: ModelVariant) -> list[Symbol]:
    """Explode one word into character symbols and apply the boundary rule."""
    chars = list(word)
    match variant.word_boundary_style:
        case WordBoundaryStyle.SUFFIX_MARKER:
            return chars + [variant.end_of_word]
        case WordBoundaryStyle.PREFIX_MARKER:
            prefix = variant.continuation_prefix
            return chars[:1] + [prefix + c for c in chars[1:]]
        case WordBoundaryStyle.NONE:
            return chars


def prepare(text: str, variant: ModelVariant) -> tuple[SymbolSequence, Vocabulary]:
    """
    Build the step-0 state for a merge run.

    The vocabulary lists every distinct symbol of the sequence in first-seen
    order, followed by the variant's special tokens that are not already there.

    :param text: Raw input text.
    :param variant: Variant whose preprocessing rules apply.
    :returns: Initial symbol sequence and seed vocabulary.
    :raises EmptyInputError: If no words remain after preprocessing.
    """
    words = split_words(normalise(text, variant))
    if not words:
        raise EmptyInputError("no words to tokenize", variant=variant.name)

    sequence: list[Symbol] = []
    for word in words:
        sequence.extend(word_symbols(word, variant))

    # dict keeps first-seen order and drops repeats
    seen = dict.fromkeys(sequence)
    for tok in variant.special_tokens:
        seen.setdefault(tok)
    vocabulary = tuple(seen)

    log.debug(
        f"prepared {len(words)} words into {len(sequence)} symbols "
        f"with {len(vocabulary)} seed symbols ({variant.name})"
    )
    return tuple(sequence), vocabulary


__all__ = ["prepare", "normalise", "split_words", "word_symbols"]
