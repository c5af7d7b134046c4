"""Heuristic quality score for a note's content.

Every check is independent and additive:
- Length tier: >1000 chars +3, >500 +2, >200 +1
- Numbered list (e.g. "1." / "2)" / "3:") +2
- Bullet at line start ("-" or "*") +1
- "Example" or "e.g." (any case) +2
- Practical words: code, api, function, script, command +2
- Process words: workflow, process, step, implement +1

The score is a relative ranking signal with no upper bound.
"""

from __future__ import annotations

import re
from typing import List, Tuple

from .ingest import Note

# (minimum exclusive length, points), checked longest first
LENGTH_TIERS: List[Tuple[int, int]] = [(1000, 3), (500, 2), (200, 1)]

_NUMBERED_RE = re.compile(r"\d+[.):]")
_BULLET_RE = re.compile(r"^[-*]", re.MULTILINE)
_EXAMPLE_RE = re.compile(r"Example|e\.g\.", re.IGNORECASE)
_PRACTICAL_RE = re.compile(r"\b(code|api|function|script|command)\b", re.IGNORECASE | re.ASCII)
_PROCESS_RE = re.compile(r"\b(workflow|process|step|implement)\b", re.IGNORECASE | re.ASCII)

CONTENT_RULES: List[Tuple[re.Pattern, int]] = [
    (_NUMBERED_RE, 2),
    (_BULLET_RE, 1),
    (_EXAMPLE_RE, 2),
    (_PRACTICAL_RE, 2),
    (_PROCESS_RE, 1),
]


def length_points(content: str) -> int:
    n = len(content or "")
    for min_len, points in LENGTH_TIERS:
        if n > min_len:
            return points
    return 0


def score_content_quality(content: str) -> int:
    content = content or ""
    score = length_points(content)
    for pattern, points in CONTENT_RULES:
        if pattern.search(content):
            score += points
    return score


def score_note_quality(note: Note) -> int:
    return score_content_quality(note.content)
