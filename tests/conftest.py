"""
Shared fixtures for the quorum simulation tests.
"""
import random

import pytest

from quorum_sim.core.bus import Msg
from quorum_sim.core.consensus.paxos import Proposer
from quorum_sim.core.tokens import TokenSource
from quorum_sim.sim import Config


@pytest.fixture
def rng():
    """Seeded generator so every test is replayable."""
    return random.Random(1234)


@pytest.fixture
def tokens(rng):
    return TokenSource(rng)


@pytest.fixture
def outcomes():
    """Collects notifications emitted by proposers."""
    return []


@pytest.fixture
def make_proposer(tokens, outcomes):
    """Factory for a proposer wired to acceptors 0..n-1."""
    def _make(n_acceptors=3, node_id=100):
        return Proposer(node_id, range(n_acceptors), tokens, outcomes.append)
    return _make


@pytest.fixture
def quiet_config():
    """Factory for configs that never touch the disk."""
    def _make(**overrides):
        overrides.setdefault("detailed_log", False)
        return Config(**overrides)
    return _make


class Echo:
    """Fake participant that answers every message with a fixed body."""

    def __init__(self, nid, reply_to=None, copies=1):
        self.id = nid
        self.reply_to = reply_to
        self.copies = copies
        self.seen = []

    def receive(self, src, body):
        self.seen.append((src, body))
        if self.reply_to is None:
            return []
        return [Msg(src=self.id, dst=self.reply_to, body=body) for _ in range(self.copies)]


@pytest.fixture
def echo_cls():
    return Echo
