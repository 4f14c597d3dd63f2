"""Tests for compute(): trajectory shape, invariants and the worked examples."""

import json

import pytest

import bpesim as bsim
from bpesim._merge import bpe_merge

SAMPLE_TEXTS = [
    "low lower newest widest",
    "attention is all you need transformer architecture self attention mechanism",
    "the quick brown fox jumps over the lazy dog the quick brown fox",
    "aaaa aaaa aaaa",
    "Hello, World! hello world.",
]


# Worked example
# ---------------------------------------------------------------------------


def test_scenario_initial_step(scenario):
    """Step 0 holds the raw characters with boundary markers."""
    step0 = scenario[0]
    assert step0.iteration == 0
    assert step0.chosen_pair is None
    assert step0.frequency == 0
    assert step0.rules == ()
    assert len(step0.sequence) == 24
    assert len(step0.vocabulary) == 11
    assert scenario.seed_size == 11


def test_scenario_merges(scenario):
    """The merge order follows frequency, then length, then first occurrence."""
    assert [step.chosen_pair for step in scenario.steps[1:]] == [
        ("l", "o"),
        ("w", "e"),
        ("s", "t"),
        ("st", "</w>"),
    ]
    assert [step.frequency for step in scenario.steps[1:]] == [2, 2, 2, 2]
    assert scenario.learned_symbols() == ("lo", "we", "st", "st</w>")
    assert scenario.final_sequence == (
        "lo", "w", "</w>",
        "lo", "we", "r", "</w>",
        "n", "e", "we", "st</w>",
        "w", "i", "d", "e", "st</w>",
    )


def test_scenario_statistics(scenario):
    stats = scenario.statistics
    assert stats.total_merges == 4
    assert stats.final_compression_ratio == pytest.approx(23 / 16)
    assert stats.average_symbol_length == pytest.approx(36 / 16)
    assert stats.vocabulary_efficiency == pytest.approx(15 / 20)
    assert stats.unique_symbols == 11


def test_budget_equal_to_seed_gives_single_step():
    traj = bsim.compute("low lower newest widest", 11, "custom")
    assert len(traj) == 1
    assert traj.n_merges == 0


def test_budget_below_seed_gives_single_step():
    traj = bsim.compute("low lower newest widest", 3, "custom")
    assert len(traj) == 1


def test_special_token_counts_toward_seed():
    traj = bsim.compute("low lower newest widest", 20, "gpt-2")
    assert traj.seed_size == 12
    assert "<|endoftext|>" in traj.final_vocabulary
    assert traj.n_merges == 4


# Variants
# ---------------------------------------------------------------------------


def test_wordpiece_merges_drop_prefix():
    traj = bsim.compute("cat cat", 20, "bert")
    assert traj[1].chosen_pair == ("c", "##a")
    assert traj[1].new_symbol == "ca"
    assert traj[2].new_symbol == "cat"
    assert traj.final_sequence == ("cat", "cat")


def test_sentencepiece_merges():
    traj = bsim.compute("ab ab", 20, "t5")
    assert traj.n_merges == 1
    assert traj.final_sequence == ("ab", "▁", "ab")


def test_variant_by_display_name():
    assert bsim.compute("ab ab", 20, "GPT-2") == bsim.compute("ab ab", 20, "gpt_2")


def test_default_budget_comes_from_variant():
    traj = bsim.compute("ab ab ab")
    assert traj.max_vocab_size == bsim.get_variant("custom").vocab_size_default


def test_unknown_variant_raises():
    with pytest.raises(bsim.VariantError):
        bsim.compute("ab ab", 20, "gpt-5")


@pytest.mark.parametrize("text", ["", "   ", "\n\t"])
def test_empty_text_raises(text):
    with pytest.raises(bsim.EmptyInputError):
        bsim.compute(text, 20, "custom")


def test_invalid_budget_raises():
    with pytest.raises(bsim.InvalidBudgetError):
        bsim.compute("ab ab", 0, "custom")


def test_compare_variants():
    results = bsim.compare_variants("the cat sat on the mat", max_vocab_size=60)
    assert list(results) == ["GPT-2", "GPT-4", "BERT", "T5/SentencePiece", "LLaMA"]
    for traj in results.values():
        assert traj.max_vocab_size == 60


# Invariants
# ---------------------------------------------------------------------------


def _trajectories():
    for text in SAMPLE_TEXTS:
        for name in bsim.list_variants():
            yield bsim.compute(text, 60, name)


def test_vocabulary_grows_by_one_per_merge():
    for traj in _trajectories():
        base = len(traj[0].vocabulary)
        for k, step in enumerate(traj):
            assert len(step.vocabulary) == base + k
            assert len(set(step.vocabulary)) == len(step.vocabulary)


def test_sequence_shrinks_by_merged_occurrences():
    for traj in _trajectories():
        for prev, step in zip(traj.steps, traj.steps[1:]):
            merged, n_merged = bpe_merge(prev.sequence, step.chosen_pair, step.new_symbol)
            assert n_merged >= 1
            assert tuple(merged) == step.sequence
            assert len(prev.sequence) - len(step.sequence) == n_merged


def test_sequence_symbols_are_in_vocabulary():
    for traj in _trajectories():
        for step in traj:
            assert set(step.sequence) <= set(step.vocabulary)


def test_rules_and_frequency_floor():
    for traj in _trajectories():
        for k, step in enumerate(traj):
            assert len(step.rules) == k
            assert step.iteration == k
            if k:
                assert step.frequency >= 2
                assert step.rules[-1].pair == step.chosen_pair


def test_determinism():
    """Identical inputs give identical trajectories."""
    for text in SAMPLE_TEXTS:
        first = bsim.compute(text, 60, "bert")
        second = bsim.compute(text, 60, "bert")
        assert first == second
        assert json.dumps(first.to_dict()) == json.dumps(second.to_dict())


def test_statistics_match_recorded_steps(scenario):
    """Statistics can be recomputed from what the steps already record."""
    stats = bsim.compute_statistics(scenario)
    assert stats.final_compression_ratio == scenario.final_step.compression_ratio
    assert scenario.compression_history()[0] == pytest.approx(23 / 24)
    assert scenario.compression_history() == sorted(scenario.compression_history())


def test_to_dict_is_plain_data(scenario):
    data = json.loads(json.dumps(scenario.to_dict()))
    assert len(data["steps"]) == 5
    assert data["steps"][0]["chosen_pair"] is None
    assert data["steps"][1]["chosen_pair"] == ["l", "o"]
    assert data["steps"][1]["rules"] == [{"left": "l", "right": "o", "result": "lo"}]
    assert data["statistics"]["total_merges"] == 4
