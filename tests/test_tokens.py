"""
File: tests/test_tokens.py
Unit tests for the correlation token source.
"""
import random

from quorum_sim.core.tokens import TokenSource


def test_seeded_tokens_replay():
    a = TokenSource(random.Random(5))
    b = TokenSource(random.Random(5))
    assert [a.next() for _ in range(10)] == [b.next() for _ in range(10)]


def test_tokens_are_version_4_and_unique(tokens):
    issued = [tokens.next() for _ in range(500)]
    assert all(t.version == 4 for t in issued)
    assert len(set(issued)) == 500


def test_unseeded_source_uses_uuid4():
    src = TokenSource()
    first, second = src.next(), src.next()
    assert first != second
    assert first.version == 4
