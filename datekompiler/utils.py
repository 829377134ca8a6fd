import logging

import regex as re

# Level for per-transition parser records, below DEBUG.
TRACE = 5
logging.addLevelName(TRACE, "TRACE")

RE_HANGUL = re.compile(r"\p{Hangul}")
RE_NBSP = re.compile("\xa0", flags=re.UNICODE)
RE_SPACES = re.compile(r"\s+")


def contains_korean(text):
    """Return True if ``text`` has at least one Hangul syllable or jamo."""
    return RE_HANGUL.search(text) is not None


def sanitize_spaces(text):
    text = RE_NBSP.sub(" ", text)
    text = RE_SPACES.sub(" ", text)
    return text.strip()
