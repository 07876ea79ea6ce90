"""Step 3: Identity-key deduplication."""

from .fingerprint import identity_key
from .filter import filter_duplicates_in_batch, find_duplicates

__all__ = [
    "identity_key",
    "filter_duplicates_in_batch",
    "find_duplicates",
]
