"""Hot score - recency decay weighted by content type and topical boosts.

score = 1 / (1 + age_days) * type_weight * product(matching boosts)

Boosts are independent: every matching rule multiplies in.
"""

import re
from datetime import datetime
from typing import List, Tuple

from ..models import Item, ItemType

MS_PER_DAY = 86_400_000

TYPE_WEIGHTS = {
    ItemType.PAPER: 1.12,
    ItemType.NEWS: 1.05,
    ItemType.VIDEO: 1.02,
}
DEFAULT_TYPE_WEIGHT = 1.0

# (name, pattern, multiplier) - matched case-insensitively on title + summary
BOOST_RULES: List[Tuple[str, re.Pattern, float]] = [
    ("survey", re.compile(r"survey|综述", re.IGNORECASE), 1.15),
    ("benchmark", re.compile(r"benchmark|dataset|数据集|基准", re.IGNORECASE), 1.10),
    ("embodied", re.compile(r"embodied|具身智能", re.IGNORECASE), 1.08),
    ("autonomous_driving", re.compile(r"autonomous driving|self-driving|自动驾驶|自動駕駛", re.IGNORECASE), 1.06),
]


def age_days(item: Item, now: datetime) -> float:
    """Age in days, never negative; a missing timestamp counts as now."""
    if item.published_at is None:
        return 0.0
    delta_ms = (now - item.published_at).total_seconds() * 1000
    return max(0.0, delta_ms / MS_PER_DAY)


def matched_boosts(text: str) -> list[str]:
    return [name for name, pattern, _ in BOOST_RULES if pattern.search(text)]


def boost_multiplier(text: str) -> float:
    multiplier = 1.0
    for _, pattern, factor in BOOST_RULES:
        if pattern.search(text):
            multiplier *= factor
    return multiplier


def hot_score(item: Item, now: datetime) -> float:
    recency = 1.0 / (1.0 + age_days(item, now))
    weight = TYPE_WEIGHTS.get(item.type, DEFAULT_TYPE_WEIGHT)
    return recency * weight * boost_multiplier(item.text)
