"""Shared test helpers."""

import pytest


class SequenceRng:
    """Stand-in for random.Random whose choice() replays fixed picks."""

    def __init__(self, picks):
        self._picks = iter(picks)
        self.calls = 0

    def choice(self, seq):
        self.calls += 1
        return next(self._picks)


@pytest.fixture
def sequence_rng():
    """Factory for an rng that yields the given characters in order."""
    return SequenceRng
