"""Tests for greedy clustering and representative selection."""

from collections import Counter

import pytest

from note_curator.cluster import Group, group_similar_notes, select_best_note
from note_curator.ingest import Note
from note_curator.similarity import note_similarity


def make_note(title, content="", lesson_id="1"):
    return Note(title=title, content=content, lesson_title=f"Lesson {lesson_id}", lesson_id=lesson_id)


@pytest.fixture
def anchor_triple():
    """A ~ B and A ~ C by title containment, but B and C are dissimilar."""
    a = make_note("Prompt")
    b = make_note("Prompt caching")
    c = make_note("Prompt chaining")
    return a, b, c


@pytest.fixture
def corpus():
    """Fixture providing a small mixed corpus with duplicates."""
    return [
        make_note("Prompt Caching", "Cache long system prompts.", "1"),
        make_note("Tool Use", "Define tools with a JSON schema.", "1"),
        make_note("prompt caching", "Cache breakpoints let you reuse prefixes across calls.", "2"),
        make_note("Extended Thinking", "Give the model a thinking budget.", "2"),
        make_note("Tool use in practice", "Return tool results in the next turn.", "3"),
        make_note("Vision", "Send images as base64 blocks.", "3"),
    ]


class TestGroupSimilarNotes:
    """Test the single-pass anchor clustering."""

    def test_empty_input(self):
        """Test that no notes yield no groups."""
        assert group_similar_notes([]) == []

    def test_single_note(self):
        note = make_note("Only")
        groups = group_similar_notes([note])
        assert len(groups) == 1
        assert groups[0].notes == [note]
        assert groups[0].best_note == note

    def test_partition_property(self, corpus):
        """Test that every note lands in exactly one group."""
        groups = group_similar_notes(corpus)
        members = [n for g in groups for n in g.notes]
        assert Counter(members) == Counter(corpus)

    def test_duplicates_are_merged(self, corpus):
        groups = group_similar_notes(corpus)
        by_key = {g.group_key: g for g in groups}
        assert [n.lesson_id for n in by_key["prompt caching"].notes] == ["1", "2"]
        assert [n.title for n in by_key["tool use"].notes] == ["Tool Use", "Tool use in practice"]
        assert len(groups) == 4

    def test_group_order_is_discovery_order(self, corpus):
        groups = group_similar_notes(corpus)
        assert [g.group_key for g in groups] == [
            "prompt caching",
            "tool use",
            "extended thinking",
            "vision",
        ]

    def test_members_keep_input_order(self, corpus):
        groups = group_similar_notes(corpus)
        for g in groups:
            positions = [corpus.index(n) for n in g.notes]
            assert positions == sorted(positions)

    def test_group_key_is_anchor_normalized_title(self):
        notes = [make_note("Prompt Caching!"), make_note("PROMPT CACHING")]
        groups = group_similar_notes(notes)
        assert len(groups) == 1
        assert groups[0].group_key == "prompt caching"
        assert groups[0].anchor.title == "Prompt Caching!"

    def test_anchor_only_membership(self, anchor_triple):
        """Test that B and C join A's group although they are dissimilar to each other."""
        a, b, c = anchor_triple
        assert note_similarity(a, b) >= 0.5
        assert note_similarity(a, c) >= 0.5
        assert note_similarity(b, c) < 0.5

        groups = group_similar_notes([a, b, c], threshold=0.5)
        assert len(groups) == 1
        assert groups[0].notes == [a, b, c]

    def test_input_order_changes_groups(self, anchor_triple):
        """Test that a different input order gives a different grouping."""
        a, b, c = anchor_triple
        groups = group_similar_notes([b, c, a], threshold=0.5)
        assert [g.notes for g in groups] == [[b, a], [c]]

    def test_threshold_one_requires_exact_titles(self, anchor_triple):
        a, b, c = anchor_triple
        groups = group_similar_notes([a, b, c], threshold=1.0)
        assert len(groups) == 3

    def test_empty_content_notes_stay_singletons(self):
        """Test that notes without content or shared titles do not merge."""
        notes = [make_note("First"), make_note("Second"), make_note("Third")]
        groups = group_similar_notes(notes)
        assert [g.size for g in groups] == [1, 1, 1]

    def test_custom_scorer(self):
        """Test that a custom scorer decides membership."""
        notes = [make_note("a"), make_note("b"), make_note("c")]
        calls = []

        def scorer(x, y):
            calls.append((x.title, y.title))
            return 1.0 if y.title == "c" else 0.0

        groups = group_similar_notes(notes, scorer=scorer)
        assert [[n.title for n in g.notes] for g in groups] == [["a", "c"], ["b"]]
        # Only anchors are compared against later unprocessed notes.
        assert calls == [("a", "b"), ("a", "c")]

    def test_best_note_is_member(self, corpus):
        for g in group_similar_notes(corpus):
            assert g.best_note in g.notes


class TestSelectBestNote:
    """Test representative selection."""

    def test_longest_content_wins(self):
        notes = [make_note("a", "x" * 50), make_note("b", "x" * 500), make_note("c", "x" * 120)]
        assert select_best_note(notes).title == "b"

    def test_first_maximum_wins_ties(self):
        notes = [make_note("a", "x" * 10), make_note("b", "y" * 30), make_note("c", "z" * 30)]
        assert select_best_note(notes).title == "b"

    def test_accepts_group(self):
        notes = [make_note("a", "short"), make_note("b", "much longer content")]
        group = Group(group_key="a", notes=notes)
        assert select_best_note(group) is notes[1]

    def test_empty_group(self):
        """Test that an empty group has no representative."""
        assert select_best_note([]) is None
        assert select_best_note(Group(group_key="")) is None
