"""Topic tagging - ordered keyword rules over title + summary.

Each rule contributes at most one tag. Patterns are matched against the
lower-cased text, so they are written in lower case.
"""

import re
from typing import List, Tuple

# (tag, pattern) - order is the order tags are reported in
TAG_RULES: List[Tuple[str, re.Pattern]] = [
    ("Autonomous Driving", re.compile(r"autonomous driving|self-driving|自动驾驶|自動駕駛")),
    ("Robotics", re.compile(r"\brobot\b|robotics|机器人")),
    ("Embodied AI", re.compile(r"embodied|具身智能")),
    ("LLM", re.compile(r"large language model|\bllm\b")),
    ("RL", re.compile(r"reinforcement learning|\brl\b")),
    ("Vision", re.compile(r"vision|perception|视觉")),
    ("Planning", re.compile(r"planning|mpc|slam|mapping")),
]

TAG_VOCABULARY = [tag for tag, _ in TAG_RULES]


def tag(title: str, summary: str) -> list[str]:
    """Tags whose rule matches, in rule order."""
    text = f"{title or ''} {summary or ''}".lower()
    return [name for name, pattern in TAG_RULES if pattern.search(text)]
