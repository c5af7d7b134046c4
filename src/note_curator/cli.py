"""CLI entrypoint for note curation.

Usage:
  python -m note_curator.cli curate --input notes.json --out out/curated.json
  python -m note_curator.cli groups --input notes.json --out out/groups.csv
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import List

from .cache import TTLCache
from .ingest import Note, read_notes, write_notes_json
from .pipeline import DEFAULT_TARGET_COUNT, curate_notes
from .cluster import DEFAULT_THRESHOLD, group_similar_notes
from .report import print_summary, write_groups_csv
from .similarity import SimilarityScorer

DEFAULT_CONFIG = {
    "threshold": DEFAULT_THRESHOLD,
    "target_count": DEFAULT_TARGET_COUNT,
    "cache": {"max_entries": 1000, "ttl_seconds": 300},
}


def load_config(path: str | Path) -> dict:
    path = Path(path)
    cfg = json.loads(json.dumps(DEFAULT_CONFIG))
    if not path.exists():
        # Default config
        return cfg
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in config file {path}: {e}")
    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a JSON object")
    cfg.update(data)
    return cfg


def _run_params(args: argparse.Namespace, cfg: dict) -> tuple[float, int]:
    threshold = args.threshold if args.threshold is not None else float(cfg.get("threshold", DEFAULT_THRESHOLD))
    if not 0.0 <= threshold <= 1.0:
        raise ValueError(f"Threshold must be between 0 and 1, got {threshold}")
    target = getattr(args, "target_count", None)
    if target is None:
        target = int(cfg.get("target_count", DEFAULT_TARGET_COUNT))
    if target < 0:
        raise ValueError(f"Target count must not be negative, got {target}")
    return threshold, target


# Every command sends errors and load progress to stderr, since `curate`
# can write the curated JSON itself to stdout. Summaries use stdout otherwise.
def _load_notes(path: str) -> List[Note]:
    notes = read_notes(path)
    print(f"Loaded {len(notes)} notes from: {path}", file=sys.stderr)
    return notes


def cmd_curate(args: argparse.Namespace) -> int:
    try:
        cfg = load_config(args.config)
        threshold, target = _run_params(args, cfg)
        notes = _load_notes(args.input)
        cache = TTLCache.from_config(cfg.get("cache"))
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    result = curate_notes(notes, threshold=threshold, target_count=target, cache=cache)

    # Without --out the curated JSON owns stdout, so messages go to stderr.
    messages = sys.stdout if args.out else sys.stderr
    if args.out:
        write_notes_json(args.out, result.selected)
    else:
        json.dump([n.to_dict() for n in result.selected], sys.stdout, ensure_ascii=False, indent=2)
        sys.stdout.write("\n")

    print_summary(result, file=messages)
    if args.out:
        print(f"Wrote curated notes: {args.out}", file=messages)
    if args.groups_out:
        written = write_groups_csv(args.groups_out, result.groups)
        print(f"Wrote group report ({written} groups): {args.groups_out}", file=messages)
    return 0


def cmd_groups(args: argparse.Namespace) -> int:
    """Write a report of how notes were grouped, without selecting."""
    try:
        cfg = load_config(args.config)
        threshold, _ = _run_params(args, cfg)
        notes = _load_notes(args.input)
        cache = TTLCache.from_config(cfg.get("cache"))
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    groups = group_similar_notes(notes, threshold=threshold, scorer=SimilarityScorer(cache))
    written = write_groups_csv(args.out, groups, min_size=args.min_size)
    print(f"Found {len(groups)} groups (out of {len(notes)} notes)")
    if args.min_size > 1:
        print(f"Filtered to groups with {args.min_size}+ notes: {written}")
    print(f"Wrote group report: {args.out}")
    return 0


def cmd_compare(args: argparse.Namespace) -> int:
    """Show the similarity of two ad-hoc notes and the rule that decided it."""
    a = Note(title=args.title_a, content=args.content_a)
    b = Note(title=args.title_b, content=args.content_b)
    score, reason = SimilarityScorer().explain(a, b)
    print(f"similarity={score:.3f} reason={reason}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="notecurator", description="Deduplicate and curate extracted notes")
    sub = p.add_subparsers(dest="cmd", required=True)

    curate = sub.add_parser("curate", help="Group similar notes and select the best ones")
    curate.add_argument("--input", required=True, help="Path to notes (.json array or .csv)")
    curate.add_argument("--out", help="Path to curated JSON output (default: stdout)")
    curate.add_argument(
        "--config",
        default="resources/config.json",
        help="Path to config.json (optional; defaults will be used if missing)",
    )
    curate.add_argument("--threshold", type=float, help="Similarity threshold (default from config: 0.5)")
    curate.add_argument("--target-count", type=int, help="Number of notes to select (default from config: 70)")
    curate.add_argument("--groups-out", help="Optional path to a CSV report of all groups")
    curate.set_defaults(func=cmd_curate)

    groups = sub.add_parser("groups", help="Write a CSV report of note groups")
    groups.add_argument("--input", required=True, help="Path to notes (.json array or .csv)")
    groups.add_argument("--out", required=True, help="Path to output CSV report")
    groups.add_argument(
        "--config",
        default="resources/config.json",
        help="Path to config.json (optional; defaults will be used if missing)",
    )
    groups.add_argument("--threshold", type=float, help="Similarity threshold (default from config: 0.5)")
    groups.add_argument(
        "--min-size",
        type=int,
        default=1,
        help="Only report groups with at least this many notes (e.g., --min-size 2 shows only merged notes)",
    )
    groups.set_defaults(func=cmd_groups)

    compare = sub.add_parser("compare", help="Score the similarity of two notes")
    compare.add_argument("--title-a", required=True)
    compare.add_argument("--title-b", required=True)
    compare.add_argument("--content-a", default="")
    compare.add_argument("--content-b", default="")
    compare.set_defaults(func=cmd_compare)

    return p


def main(argv: List[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    return args.func(args)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
