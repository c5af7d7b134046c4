"""Title normalization for grouping notes.

Policy:
- Lowercase, drop everything that is not an ASCII letter, digit or whitespace.
- Collapse whitespace and trim.

The result is a comparison key only; it is never shown to users.
"""

from __future__ import annotations

import re

_NON_KEY_RE = re.compile(r"[^a-z0-9\s]")
_WS_RE = re.compile(r"\s+")


def normalize_title(title: str) -> str:
    """Normalize a note title into its comparison key.

    Steps: lowercase -> strip non [a-z0-9 whitespace] characters -> collapse
    whitespace and trim. Always returns a string (possibly empty).
    """
    if not title:
        return ""
    t = str(title).lower()
    t = _NON_KEY_RE.sub("", t)
    t = _WS_RE.sub(" ", t).strip()
    return t
