"""Step 2: Normalize adapter records into Items."""

from .html import SUMMARY_MAX_CHARS, clean_html, clean_text, clean_whitespace, strip_html, take_sentences
from .normalize import UNTITLED, batch_normalize, normalize, renormalize, resolve_id
from .tagger import TAG_RULES, TAG_VOCABULARY, tag

__all__ = [
    "SUMMARY_MAX_CHARS",
    "clean_html",
    "clean_whitespace",
    "strip_html",
    "take_sentences",
    "clean_text",
    "UNTITLED",
    "resolve_id",
    "normalize",
    "renormalize",
    "batch_normalize",
    "TAG_RULES",
    "TAG_VOCABULARY",
    "tag",
]
