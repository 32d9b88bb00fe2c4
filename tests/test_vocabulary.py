"""
Tests for vocabulary building.

These tests validate that:

- tokens are ranked by frequency, ties broken by first appearance
- the size cap is honoured and index 0 is never assigned
- building is deterministic and the result is immutable
"""

from __future__ import annotations

import dataclasses
import pickle

import pytest

from textseq.features.vocabulary import PAD_INDEX, Vocabulary, build_vocabulary, count_tokens


def test_concrete_scenario():
    vocab = build_vocabulary(["a a b", "b c"], max_size=2)

    assert vocab.to_dict() == {"a": 1, "b": 2}
    assert "c" not in vocab


def test_frequency_outranks_first_appearance():
    vocab = build_vocabulary(["c b b a a a"], max_size=None)
    assert vocab.tokens == ["a", "b", "c"]


def test_ties_keep_first_seen_order():
    vocab = build_vocabulary(["z y", "y z x x"], max_size=10)
    assert vocab.to_dict() == {"z": 1, "y": 2, "x": 3}


def test_cap_and_reserved_index():
    corpus = ["one two three four five six", "two three", "three"]
    for cap in range(0, 8):
        vocab = build_vocabulary(corpus, max_size=cap)
        assert len(vocab) <= cap
        assert PAD_INDEX not in vocab.to_dict().values()
        assert sorted(vocab.to_dict().values()) == list(range(1, len(vocab) + 1))


def test_uncapped_keeps_every_token():
    vocab = build_vocabulary(["a b", "c"], max_size=None)
    assert vocab.size == 3
    assert vocab.max_size is None


def test_empty_corpus_gives_empty_vocabulary():
    assert len(build_vocabulary([], max_size=5)) == 0
    assert len(build_vocabulary(["", "   ", None], max_size=5)) == 0


def test_negative_cap_raises():
    with pytest.raises(ValueError):
        build_vocabulary(["a"], max_size=-1)


def test_build_is_deterministic():
    corpus = ["delta alpha", "charlie bravo alpha", "bravo delta echo", "echo"]
    first = build_vocabulary(corpus, max_size=4)
    second = build_vocabulary(list(corpus), max_size=4)

    assert first == second
    assert first.tokens == second.tokens


def test_count_tokens():
    counts = count_tokens(["a b", "b", None])
    assert dict(counts) == {"a": 1, "b": 2}
    assert list(counts) == ["a", "b"]


def test_vocabulary_is_immutable():
    vocab = build_vocabulary(["a b"], max_size=2)

    with pytest.raises(TypeError):
        vocab.token_to_index["c"] = 3
    with pytest.raises(dataclasses.FrozenInstanceError):
        vocab.max_size = 10


def test_vocabulary_lookup_helpers():
    vocab = build_vocabulary(["b a a"], max_size=None)

    assert vocab["a"] == 1
    assert vocab.get("b") == 2
    assert vocab.get("zzz") is None
    assert list(vocab) == ["a", "b"]


def test_vocabulary_rejects_padding_index():
    with pytest.raises(ValueError):
        Vocabulary(token_to_index={"a": PAD_INDEX})


@pytest.mark.parametrize(
    "token_to_index",
    [
        {"a": -1, "b": 1, "c": 2},
        {"a": 1, "b": 1},
        {"a": 1, "b": 3},
        {"a": 1.0},
        {"a": True},
        {"a": "1"},
    ],
)
def test_vocabulary_rejects_invalid_indices(token_to_index):
    with pytest.raises(ValueError):
        Vocabulary(token_to_index=token_to_index)


def test_vocabulary_rejects_more_tokens_than_cap():
    with pytest.raises(ValueError):
        Vocabulary(token_to_index={"a": 1, "b": 2}, max_size=1)


def test_vocabulary_accepts_indices_in_any_order():
    vocab = Vocabulary(token_to_index={"b": 2, "a": 1})
    assert vocab.tokens == ["a", "b"]


def test_vocabulary_is_hashable():
    first = build_vocabulary(["a a b", "b c"], max_size=2)
    second = build_vocabulary(["a a b", "b c"], max_size=2)

    assert hash(first) == hash(second)
    assert len({first, second}) == 1


def test_vocabulary_pickles():
    vocab = build_vocabulary(["a a b", "b c"], max_size=2)
    assert pickle.loads(pickle.dumps(vocab)) == vocab
