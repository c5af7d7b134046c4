"""End-to-end curation of one batch of notes.

notes -> group_similar_notes -> representatives -> rank_groups -> top K
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from .cache import TTLCache, content_key
from .cluster import DEFAULT_THRESHOLD, Group, group_similar_notes
from .ingest import Note
from .ranking import ScoredRepresentative, rank_groups
from .quality import score_note_quality
from .similarity import SimilarityScorer

DEFAULT_TARGET_COUNT = 70


@dataclass
class CurationResult:
    notes: List[Note]
    groups: List[Group]
    ranked: List[ScoredRepresentative]
    selected: List[Note] = field(default_factory=list)

    @property
    def input_count(self) -> int:
        return len(self.notes)

    @property
    def group_count(self) -> int:
        return len(self.groups)

    @property
    def selected_count(self) -> int:
        return len(self.selected)

    @property
    def reduction_percent(self) -> int:
        """Share of input notes dropped, rounded to a whole percent (0 for empty input)."""
        if not self.notes:
            return 0
        # Half rounds up (63 for 3 of 8), not to even.
        return math.floor((1 - self.selected_count / self.input_count) * 100 + 0.5)


def _cached_quality(cache: Optional[TTLCache]):
    if cache is None:
        return score_note_quality

    def quality(note: Note) -> int:
        key = ("quality", content_key(note.content))
        return cache.get_or_compute(key, lambda: score_note_quality(note))

    return quality


def curate_notes(
    notes: Sequence[Note],
    threshold: float = DEFAULT_THRESHOLD,
    target_count: int = DEFAULT_TARGET_COUNT,
    cache: Optional[TTLCache] = None,
) -> CurationResult:
    """Group, rank and truncate ``notes`` into a curated list.

    Args:
        notes: Notes in input order (not reordered before clustering)
        threshold: Similarity threshold for joining an anchor's group
        target_count: Maximum number of notes to select
        cache: Optional scoped cache for keyword sets and quality scores

    Returns:
        CurationResult with groups, the full ranking and the selected notes
    """
    notes = list(notes)
    groups = group_similar_notes(notes, threshold=threshold, scorer=SimilarityScorer(cache))
    ranked = rank_groups(groups, scorer=_cached_quality(cache))
    selected = [s.note for s in ranked[: max(target_count, 0)]]
    return CurationResult(notes=notes, groups=groups, ranked=ranked, selected=selected)
