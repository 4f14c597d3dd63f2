"""Tests for the model variant catalog."""

import dataclasses

import pytest

import bpesim as bsim


def test_list_variants():
    assert bsim.list_variants() == ["gpt-2", "gpt-4", "bert", "t5", "llama", "custom"]


def test_get_variant_is_case_insensitive():
    assert bsim.get_variant("BERT") is bsim.get_variant("bert")
    assert bsim.get_variant("T5/SentencePiece") is bsim.get_variant("t5")


def test_unknown_variant():
    with pytest.raises(bsim.VariantError) as exc:
        bsim.get_variant("xlnet")
    assert exc.value.invalid_name == "xlnet"
    assert "custom" in exc.value.available


def test_variants_are_frozen():
    with pytest.raises(dataclasses.FrozenInstanceError):
        bsim.get_variant("custom").vocab_size_default = 5


def test_duplicate_special_tokens_rejected():
    with pytest.raises(bsim.VariantError):
        bsim.ModelVariant(name="dup", vocab_size_default=10, special_tokens=("<s>", "<s>"))


def test_prefix_marker_requires_prefix():
    with pytest.raises(bsim.VariantError):
        bsim.ModelVariant(
            name="bad",
            vocab_size_default=10,
            word_boundary_style=bsim.WordBoundaryStyle.PREFIX_MARKER,
            continuation_prefix="",
        )


def test_boundary_style_lookup():
    assert bsim.WordBoundaryStyle.get("prefix-marker") is bsim.WordBoundaryStyle.PREFIX_MARKER
    with pytest.raises(bsim.VariantError):
        bsim.WordBoundaryStyle.get("infix")


def test_custom_variant_in_compute():
    """A user-built variant runs without being registered."""
    variant = bsim.ModelVariant(
        name="Chars",
        vocab_size_default=50,
        word_boundary_style=bsim.WordBoundaryStyle.NONE,
    )
    traj = bsim.compute("abab abab", None, variant)
    assert traj[0].sequence == tuple("ababab" "ab")
    assert traj[1].chosen_pair == ("a", "b")


@pytest.mark.parametrize("style", ["prefix", "PREFIX", "prefix-marker", "PREFIX_MARKER"])
def test_boundary_style_given_as_string(style):
    """A plain style name is stored as the enum and drives both marking and merging."""
    variant = bsim.ModelVariant(name="wp", vocab_size_default=50, word_boundary_style=style)
    assert variant.word_boundary_style is bsim.WordBoundaryStyle.PREFIX_MARKER
    traj = bsim.compute("cat cat", 20, variant)
    assert traj[0].sequence == ("c", "##a", "##t", "c", "##a", "##t")
    assert traj[1].new_symbol == "ca"


def test_unknown_boundary_style_string_rejected():
    with pytest.raises(bsim.VariantError):
        bsim.ModelVariant(name="bad", vocab_size_default=10, word_boundary_style="infix")
