"""Greedy single-pass clustering of notes and representative selection.

Each unprocessed note opens a group (the anchor); every later unprocessed
note whose similarity to the anchor reaches the threshold joins that group.
Membership is tested against the anchor only, never between two members, so
two notes in one group can be mutually dissimilar. Output depends on input
order: callers must not reorder notes before clustering.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence, Set

from .ingest import Note
from .normalize import normalize_title
from .similarity import note_similarity

DEFAULT_THRESHOLD = 0.5

NoteScorer = Callable[[Note, Note], float]


@dataclass
class Group:
    """A cluster of notes opened by its anchor (``notes[0]``).

    Attributes:
        group_key: Normalized title of the anchor note
        notes: Members in input order
        best_note: Representative, attached once by select_best_note
    """
    group_key: str
    notes: List[Note] = field(default_factory=list)
    best_note: Optional[Note] = None

    @property
    def anchor(self) -> Note:
        return self.notes[0]

    @property
    def size(self) -> int:
        return len(self.notes)


def select_best_note(notes: Sequence[Note] | Group) -> Optional[Note]:
    """Pick the note with the longest content; the first one wins ties.

    Returns None for an empty group.
    """
    members = notes.notes if isinstance(notes, Group) else notes
    if not members:
        return None
    best = members[0]
    for note in members[1:]:
        if len(note.content) > len(best.content):
            best = note
    return best


def group_similar_notes(
    notes: Sequence[Note],
    threshold: float = DEFAULT_THRESHOLD,
    scorer: Optional[NoteScorer] = None,
) -> List[Group]:
    """Partition ``notes`` into groups in discovery order.

    Args:
        notes: Notes in input order
        threshold: Minimum similarity to the anchor for joining its group
        scorer: Note similarity function (defaults to note_similarity)

    Returns:
        Groups with members in input order and best_note attached
    """
    score = scorer or note_similarity
    groups: List[Group] = []
    processed: Set[int] = set()

    for i, anchor in enumerate(notes):
        if i in processed:
            continue
        group = Group(group_key=normalize_title(anchor.title), notes=[anchor])
        processed.add(i)

        for j in range(i + 1, len(notes)):
            if j in processed:
                continue
            if score(anchor, notes[j]) >= threshold:
                group.notes.append(notes[j])
                processed.add(j)

        group.best_note = select_best_note(group)
        groups.append(group)

    return groups
