"""Ranking of group representatives and top-K selection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional

from .cluster import Group, select_best_note
from .ingest import Note
from .quality import score_note_quality

QualityFn = Callable[[Note], int]


@dataclass
class ScoredRepresentative:
    note: Note
    score: int
    group_size: int


def rank_groups(groups: Iterable[Group], scorer: Optional[QualityFn] = None) -> List[ScoredRepresentative]:
    """Score each group's representative and order by score, highest first.

    The sort is stable: representatives with equal scores keep group
    discovery order.
    """
    quality = scorer or score_note_quality
    scored: List[ScoredRepresentative] = []
    for group in groups:
        best = group.best_note if group.best_note is not None else select_best_note(group)
        if best is None:
            continue
        scored.append(ScoredRepresentative(note=best, score=quality(best), group_size=group.size))
    # sorted() is stable, including with reverse=True.
    return sorted(scored, key=lambda s: s.score, reverse=True)


def select_top_notes(
    groups: Iterable[Group],
    target_count: int,
    scorer: Optional[QualityFn] = None,
) -> List[Note]:
    """Return up to ``target_count`` representatives in ranking order."""
    if target_count <= 0:
        return []
    return [s.note for s in rank_groups(groups, scorer)[:target_count]]
