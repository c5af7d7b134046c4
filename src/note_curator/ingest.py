"""Note ingest (JSON/CSV) and the common Note type.

Notes arrive already extracted from lesson documents. Accepted schemas:
- JSON: array of objects with title, content, lessonTitle, lessonId
  (snake_case lesson_title/lesson_id also accepted; lesson fields optional).
- CSV: header with title, content and optional lessonTitle, lessonId columns.
"""

from __future__ import annotations

import csv
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List


@dataclass(frozen=True)
class Note:
    title: str
    content: str
    lesson_title: str = ""
    lesson_id: str = ""

    def to_dict(self) -> dict:
        # Keys match the downstream import format.
        return {
            "title": self.title,
            "content": self.content,
            "lessonTitle": self.lesson_title,
            "lessonId": self.lesson_id,
        }


def _text(value) -> str:
    if value is None:
        return ""
    return str(value)


def note_from_dict(data: dict) -> Note:
    """Build a Note from a mapping with camelCase or snake_case lesson keys."""
    missing = {"title", "content"} - set(data.keys())
    if missing:
        raise ValueError(f"Note is missing required keys: {sorted(missing)}")
    lesson_title = data.get("lessonTitle", data.get("lesson_title", ""))
    lesson_id = data.get("lessonId", data.get("lesson_id", ""))
    return Note(
        title=_text(data["title"]),
        content=_text(data["content"]),
        lesson_title=_text(lesson_title),
        lesson_id=_text(lesson_id),
    )


def read_notes_json(path: str | Path) -> List[Note]:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Notes file not found: {path}")
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in notes file {path}: {e}")
    if not isinstance(data, list):
        raise ValueError(f"Expected a JSON array of notes in {path}, got {type(data).__name__}")
    notes: List[Note] = []
    for i, item in enumerate(data):
        if not isinstance(item, dict):
            raise ValueError(f"Entry {i} in {path} is not an object")
        try:
            notes.append(note_from_dict(item))
        except ValueError as e:
            raise ValueError(f"Entry {i} in {path}: {e}")
    return notes


def read_notes_csv(path: str | Path) -> List[Note]:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Notes file not found: {path}")
    notes: List[Note] = []
    with path.open("r", encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)
        expected = {"title", "content"}
        missing = expected - set(reader.fieldnames or [])
        if missing:
            raise ValueError(f"Missing required columns in {path}: {sorted(missing)}")
        for r in reader:
            notes.append(note_from_dict(r))
    return notes


def read_notes(path: str | Path) -> List[Note]:
    """Read notes from ``path``, choosing the format by file suffix."""
    if Path(path).suffix.lower() == ".csv":
        return read_notes_csv(path)
    return read_notes_json(path)


def write_notes_json(path: str | Path, notes: Iterable[Note]) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = [n.to_dict() for n in notes]
    path.write_text(json.dumps(payload, ensure_ascii=False, indent=2) + "\n", encoding="utf-8")


def write_csv(path: str | Path, rows: Iterable[dict]) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    rows = list(rows)
    if not rows:
        # Write empty file with no rows
        with path.open("w", encoding="utf-8", newline="") as f:
            f.write("")
        return
    fieldnames = list(rows[0].keys())
    with path.open("w", encoding="utf-8", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames)
        writer.writeheader()
        for r in rows:
            writer.writerow(r)
