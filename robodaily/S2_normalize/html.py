"""HTML and text cleaning utilities."""

import html
import re

SUMMARY_MAX_CHARS = 420

# Some feeds escape their markup more than once
_MAX_UNESCAPE_PASSES = 5

_SCRIPT_RE = re.compile(r"<script[\s\S]*?</script>", re.IGNORECASE)
_STYLE_RE = re.compile(r"<style[\s\S]*?</style>", re.IGNORECASE)
_TAG_RE = re.compile(r"<[^>]+>")
_WS_RE = re.compile(r"\s+")

# Split after sentence-ending punctuation. ASCII needs following whitespace;
# CJK full-width punctuation is usually followed directly by the next sentence.
_CJK_STOPS = "。！？"
_SENTENCE_RE = re.compile(r"(?<=[.!?])\s+|(?<=[" + _CJK_STOPS + r"])\s*")


def unescape_entities(text: str) -> str:
    """Decode entities until the text stops changing."""
    for _ in range(_MAX_UNESCAPE_PASSES):
        decoded = html.unescape(text)
        if decoded == text:
            break
        text = decoded
    return text


def clean_html(text: str) -> str:
    """Decode entities, then remove script/style blocks and tags."""
    if not text:
        return ""
    text = unescape_entities(text)
    text = _SCRIPT_RE.sub(" ", text)
    text = _STYLE_RE.sub(" ", text)
    return _TAG_RE.sub(" ", text)


def clean_whitespace(text: str) -> str:
    """Normalize whitespace."""
    if not text:
        return ""
    text = _WS_RE.sub(" ", text)
    return text.strip()


def strip_html(text: str) -> str:
    """Plain text from a markup fragment, whitespace collapsed."""
    return clean_whitespace(clean_html(text))


def _joiner(previous: str) -> str:
    return "" if previous.endswith(tuple(_CJK_STOPS)) else " "


def take_sentences(text: str, max_chars: int = SUMMARY_MAX_CHARS) -> str:
    """
    Keep whole leading sentences while the result fits in max_chars.

    Only when the first sentence alone is longer than the budget is the text
    cut mid-sentence, at exactly max_chars. Sentences after CJK punctuation
    are joined without a space.
    """
    text = clean_whitespace(text)
    if not text:
        return ""

    pieces: list[str] = []
    total = 0
    for sentence in _SENTENCE_RE.split(text):
        if not sentence:
            continue
        piece = _joiner(pieces[-1]) + sentence if pieces else sentence
        if total + len(piece) > max_chars:
            if not pieces:
                pieces.append(sentence[:max_chars].rstrip())
            break
        pieces.append(piece)
        total += len(piece)
    return "".join(pieces)


def clean_text(text: str, max_chars: int = SUMMARY_MAX_CHARS) -> str:
    """Full summary cleaning pipeline."""
    return take_sentences(strip_html(text), max_chars)
