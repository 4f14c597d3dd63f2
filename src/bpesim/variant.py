"""Model variants: the preprocessing and boundary rules of each simulated tokenizer."""

from dataclasses import dataclass
from enum import Enum
from typing import Final

from .errors import VariantError
from .types import Symbol

END_OF_WORD: Final[str] = "</w>"
CONTINUATION_PREFIX: Final[str] = "##"
WORD_SEPARATOR: Final[str] = "▁"


class WordBoundaryStyle(str, Enum):
    """How word boundaries are marked in the initial symbol sequence."""

    # append an end-of-word symbol after each word
    SUFFIX_MARKER = "suffix"
    # mark every character but the first with a continuation prefix (WordPiece)
    PREFIX_MARKER = "prefix"
    # leave characters unmarked (SentencePiece)
    NONE = "none"

    @classmethod
    def get(cls, name: "str | WordBoundaryStyle") -> "WordBoundaryStyle":
        """
        Get boundary style by value or member name (case-insensitive).

        ``"prefix"``, ``"PREFIX"``, ``"prefix-marker"`` and ``"PREFIX_MARKER"``
        all give ``PREFIX_MARKER``.
        """
        if isinstance(name, cls):
            return name
        key = name.strip().lower().replace("_", "-")
        for style in cls:
            if key in (style.value, style.name.lower().replace("_", "-")):
                return style
        raise VariantError(
            "unknown word boundary style",
            invalid_name=name,
            available=[style.value for style in cls],
        )


@dataclass(frozen=True)
class ModelVariant:
    """
    Immutable description of a tokenizer family.

    Everything that changes preprocessing or merging lives in a field here, so a
    new variant is new data rather than a new branch in the algorithm.
    """

    name: str
    vocab_size_default: int
    special_tokens: tuple[Symbol, ...] = ()
    word_boundary_style: WordBoundaryStyle = WordBoundaryStyle.SUFFIX_MARKER
    description: str = ""
    lowercase: bool = False
    strip_punctuation: bool = False
    # whitespace runs are replaced by this symbol before splitting into characters
    word_separator: Symbol | None = None
    end_of_word: Symbol = END_OF_WORD
    continuation_prefix: str = CONTINUATION_PREFIX

    def __post_init__(self) -> None:
        # accept plain names like "prefix" and store the enum member
        object.__setattr__(
            self, "word_boundary_style", WordBoundaryStyle.get(self.word_boundary_style)
        )
        if len(set(self.special_tokens)) != len(self.special_tokens):
            raise VariantError(f"duplicate special tokens in variant {self.name!r}")
        if self.vocab_size_default < 1:
            raise VariantError(
                f"default vocab size must be positive in variant {self.name!r}"
            )
        match self.word_boundary_style:
            case WordBoundaryStyle.SUFFIX_MARKER if not self.end_of_word:
                raise VariantError(f"variant {self.name!r} needs an end-of-word symbol")
            case WordBoundaryStyle.PREFIX_MARKER if not self.continuation_prefix:
                raise VariantError(
                    f"variant {self.name!r} needs a continuation prefix"
                )
        if self.word_separator == "":
            raise VariantError(f"empty word separator in variant {self.name!r}")


_VARIANTS: Final[dict[str, ModelVariant]] = {
    "gpt-2": ModelVariant(
        name="GPT-2",
        description="OpenAI's GPT-2 BPE tokenizer with 50,257 vocab size",
        vocab_size_default=50257,
        special_tokens=("<|endoftext|>",),
    ),
    "gpt-4": ModelVariant(
        name="GPT-4",
        description="GPT-4 cl100k_base tokenizer with enhanced multilingual support",
        vocab_size_default=100256,
        special_tokens=(
            "<|endoftext|>",
            "<|fim_prefix|>",
            "<|fim_middle|>",
            "<|fim_suffix|>",
        ),
    ),
    "bert": ModelVariant(
        name="BERT",
        description="BERT WordPiece tokenizer with 30K vocabulary",
        vocab_size_default=30522,
        special_tokens=("[CLS]", "[SEP]", "[PAD]", "[UNK]", "[MASK]"),
        word_boundary_style=WordBoundaryStyle.PREFIX_MARKER,
        lowercase=True,
        strip_punctuation=True,
    ),
    "t5": ModelVariant(
        name="T5/SentencePiece",
        description="T5's SentencePiece tokenizer",
        vocab_size_default=32128,
        special_tokens=("<pad>", "</s>", "<unk>", "<extra_id_0>"),
        word_boundary_style=WordBoundaryStyle.NONE,
        word_separator=WORD_SEPARATOR,
    ),
    "llama": ModelVariant(
        name="LLaMA",
        description="LLaMA's SentencePiece BPE with 32K vocabulary",
        vocab_size_default=32000,
        special_tokens=("<s>", "</s>", "<unk>"),
        word_boundary_style=WordBoundaryStyle.NONE,
        word_separator=WORD_SEPARATOR,
    ),
    "custom": ModelVariant(
        name="Custom",
        description="Standard BPE with an end-of-word marker",
        vocab_size_default=1000,
        special_tokens=(END_OF_WORD,),
    ),
}


def list_variants() -> list[str]:
    """Return the keys of all built-in model variants."""
    return list(_VARIANTS.keys())


def get_variant(name: str) -> ModelVariant:
    """
    Look up a built-in model variant.

    Matches either the catalog key ("gpt-2", "t5") or the display name
    ("GPT-2", "T5/SentencePiece"), ignoring case.

    :param name: Variant key or display name.
    :returns: The frozen variant.
    :raises VariantError: If no built-in variant has that name.
    """
    key = name.strip().lower().replace("_", "-")
    if key in _VARIANTS:
        return _VARIANTS[key]
    for variant in _VARIANTS.values():
        if variant.name.lower() == key:
            return variant
    raise VariantError(
        "unknown model variant",
        invalid_name=name,
        available=list_variants(),
    )


__all__ = [
    "END_OF_WORD",
    "CONTINUATION_PREFIX",
    "WORD_SEPARATOR",
    "WordBoundaryStyle",
    "ModelVariant",
    "get_variant",
    "list_variants",
]
