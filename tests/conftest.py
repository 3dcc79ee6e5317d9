import pytest

from inplay.state import LiveStats, TeamPair


def _pair(value):
    if isinstance(value, TeamPair):
        return value
    return TeamPair(*value)


@pytest.fixture
def make_stats():
    """Build LiveStats from (home, away) tuples; unspecified fields are zero."""
    def _make(minute=0, **pairs):
        return LiveStats.merged({"minute": minute, **{k: _pair(v) for k, v in pairs.items()}})
    return _make


@pytest.fixture
def first_half_stats(make_stats):
    return make_stats(
        minute=45,
        on_target=(5, 1),
        off_target=(2, 3),
        corners=(4, 1),
        attacks=(20, 10),
        dangerous_attacks=(8, 3),
    )
