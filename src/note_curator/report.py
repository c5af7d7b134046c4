"""Reporting utilities for curation results."""

from __future__ import annotations

import sys
from typing import Callable, Iterable, List, Optional, TextIO

from .cluster import Group, select_best_note
from .ingest import Note, write_csv
from .pipeline import CurationResult
from .quality import score_note_quality

MEMBER_SEPARATOR = " | "


def groups_to_rows(
    groups: Iterable[Group],
    scorer: Optional[Callable[[Note], int]] = None,
) -> List[dict]:
    quality = scorer or score_note_quality
    rows: List[dict] = []
    for g in groups:
        best = g.best_note if g.best_note is not None else select_best_note(g)
        rows.append(
            {
                "group_key": g.group_key,
                "group_size": g.size,
                "best_title": best.title if best else "",
                "best_lesson_id": best.lesson_id if best else "",
                "best_lesson_title": best.lesson_title if best else "",
                "quality_score": quality(best) if best else 0,
                "member_titles": MEMBER_SEPARATOR.join(n.title for n in g.notes),
            }
        )
    return rows


def write_groups_csv(path: str, groups: Iterable[Group], min_size: int = 1) -> int:
    """Write one row per group with at least ``min_size`` members.

    Returns:
        Number of groups written
    """
    rows = [r for r in groups_to_rows(groups) if r["group_size"] >= min_size]
    write_csv(path, rows)
    return len(rows)


def print_summary(result: CurationResult, preview: int = 5, file: Optional[TextIO] = None) -> None:
    """Print curation statistics and a preview of the selected titles."""
    out = file or sys.stdout
    print("Curation Summary:", file=out)
    print(f"  Original:  {result.input_count} notes", file=out)
    print(f"  Grouped:   {result.group_count} topics", file=out)
    print(f"  Selected:  {result.selected_count} top notes", file=out)
    print(f"  Reduction: {result.reduction_percent}%", file=out)

    multi = [g for g in result.groups if g.size > 1]
    if multi:
        merged = sum(g.size for g in multi)
        print(f"  Merged:    {merged} notes in {len(multi)} multi-note groups", file=out)

    if preview > 0 and result.selected:
        print(file=out)
        print("Example titles:", file=out)
        for i, note in enumerate(result.selected[:preview], start=1):
            print(f"  {i}. {note.title}", file=out)
