"""Step 5: Query filtering and ranking over a loaded snapshot."""

from .ranker import available_tags, matches, rank
from .scoring import BOOST_RULES, TYPE_WEIGHTS, age_days, boost_multiplier, hot_score, matched_boosts
from .windows import window_start

__all__ = [
    "rank",
    "matches",
    "available_tags",
    "hot_score",
    "age_days",
    "boost_multiplier",
    "matched_boosts",
    "BOOST_RULES",
    "TYPE_WEIGHTS",
    "window_start",
]
