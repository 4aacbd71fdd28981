from typing import Iterable

from match3.constants import LONG_RUN_SCORE, MIN_RUN_LENGTH, RUN_SCORES
from match3.systems.match_ops import Match


def score_run(length: int) -> int:
    """3 -> 1 point, 4 -> 2 points, 5 or more -> 6 points."""
    if length < MIN_RUN_LENGTH:
        return 0
    return RUN_SCORES.get(length, LONG_RUN_SCORE)


def score_matches(matches: Iterable[Match]) -> int:
    return sum(score_run(match.length) for match in matches)
