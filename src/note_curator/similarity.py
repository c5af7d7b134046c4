"""Similarity between two notes, as a decision list over title and keywords.

Rules (first match wins):
- exact-title-match: normalized titles are equal -> 1.0
- title-containment: one normalized title contains the other -> 0.8
- keyword-overlap: Jaccard of keywords from title + first 500 chars of content
"""

from __future__ import annotations

from typing import AbstractSet, Callable, FrozenSet, Optional, Tuple

from .cache import TTLCache, content_key
from .ingest import Note
from .keywords import extract_keywords
from .normalize import normalize_title

EXACT_TITLE_SCORE = 1.0
CONTAINMENT_SCORE = 0.8
# Only the head of the content takes part in keyword overlap.
CONTENT_WINDOW = 500

KeywordFn = Callable[[str, str], FrozenSet[str]]


def keyword_text(title: str, content: str) -> str:
    return f"{title or ''} {(content or '')[:CONTENT_WINDOW]}"


def note_keywords(title: str, content: str) -> FrozenSet[str]:
    return extract_keywords(keyword_text(title, content))


def jaccard(a: AbstractSet[str], b: AbstractSet[str]) -> float:
    """Intersection over union; two empty sets are treated as dissimilar (0.0)."""
    union = len(a | b)
    if union == 0:
        return 0.0
    return len(a & b) / union


def explain_similarity(
    title_a: str,
    content_a: str,
    title_b: str,
    content_b: str,
    keywords: KeywordFn = note_keywords,
) -> Tuple[float, str]:
    """Return (score, reason) where reason names the rule that decided the score."""
    norm_a = normalize_title(title_a)
    norm_b = normalize_title(title_b)

    if norm_a == norm_b:
        return EXACT_TITLE_SCORE, "exact-title-match"

    if norm_a in norm_b or norm_b in norm_a:
        return CONTAINMENT_SCORE, "title-containment"

    score = jaccard(keywords(title_a, content_a), keywords(title_b, content_b))
    return score, "keyword-overlap"


def calculate_similarity(title_a: str, content_a: str, title_b: str, content_b: str) -> float:
    return explain_similarity(title_a, content_a, title_b, content_b)[0]


def note_similarity(a: Note, b: Note) -> float:
    return calculate_similarity(a.title, a.content, b.title, b.content)


class SimilarityScorer:
    """Callable note-similarity scorer with optional keyword memoization.

    Keyword sets are stored in ``cache`` (keyed by a hash of the title and the
    content window), so repeated comparisons during clustering extract each
    note's keywords once. Scores are the same with or without a cache.
    """

    def __init__(self, cache: Optional[TTLCache] = None) -> None:
        self.cache = cache

    def keywords(self, title: str, content: str) -> FrozenSet[str]:
        if self.cache is None:
            return note_keywords(title, content)
        key = ("keywords", content_key(title, (content or "")[:CONTENT_WINDOW]))
        return self.cache.get_or_compute(key, lambda: note_keywords(title, content))

    def explain(self, a: Note, b: Note) -> Tuple[float, str]:
        return explain_similarity(a.title, a.content, b.title, b.content, keywords=self.keywords)

    def __call__(self, a: Note, b: Note) -> float:
        return self.explain(a, b)[0]
