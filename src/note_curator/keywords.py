"""Keyword extraction used for topical overlap between notes."""

from __future__ import annotations

import re
from typing import FrozenSet

MIN_KEYWORD_LENGTH = 4

# Whole words only: letters glued to digits or underscores (python3, max_tokens)
# are not keywords. re.ASCII keeps non-ASCII letters out of the word class.
_KEYWORD_RE = re.compile(r"\b[a-z]{%d,}\b" % MIN_KEYWORD_LENGTH, re.ASCII)


def extract_keywords(text: str) -> FrozenSet[str]:
    """Return the set of lowercase whole ASCII words of 4+ letters in ``text``.

    No stemming and no stop-word removal; repeated words collapse into one entry.
    """
    if not text:
        return frozenset()
    return frozenset(_KEYWORD_RE.findall(str(text).lower()))
