"""
Static builder: exports the reading plan and the commentary index as
compressed JSON for the viewer.

Outputs:
  data/static/plan.json.gz                        the 365 daily readings
  data/static/index.json.gz                       books with per-chapter commentary counts
  data/static/commentary/{book-slug}/{ch}.json.gz   commentary for one chapter
  data/static/commentary.json.zst                 everything in one file (--bundle)

Usage:
  python src/builder.py                  # build everything
  python src/builder.py --book genesis   # only one book's chapter files
  python src/builder.py --clean          # delete data/static/ before building
  python src/builder.py --bundle         # also write the zstd bundle
"""
from __future__ import annotations

import argparse
import gzip
import json
import shutil
import sys
from pathlib import Path

import zstandard

from bible_data import BOOKS, BY_ABBREV
from commentary import COMMENTARY_DIR, DATA_DIR, CommentaryStore, load_commentary
from reading_plan import PLAN_DAYS, DailyReading, readings

STATIC_DIR = DATA_DIR / "static"


def _write_json_gz(path: Path, payload: dict) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with gzip.open(path, "wt", encoding="utf-8") as f:
        f.write(json.dumps(payload, ensure_ascii=False, separators=(",", ":")))


def build_plan(plan: tuple[DailyReading, ...], out_dir: Path = STATIC_DIR) -> Path:
    payload = {
        "days": len(plan),
        "readings": [{"day": r.day, "passages": list(r.passages)} for r in plan],
    }
    out_file = out_dir / "plan.json.gz"
    _write_json_gz(out_file, payload)
    print(f"Wrote {out_file}  ({len(plan)} days)")
    return out_file


def _chapter_payload(store: CommentaryStore, book: dict, chapter: int) -> dict | None:
    verses = {}
    for verse in store.verses_with_commentary(book["abbrev"], chapter):
        verses[str(verse)] = [
            {"source": source.short_name, "text": [e.text for e in entries]}
            for source, entries in store.commentaries_by_source(book["abbrev"], chapter, verse)
        ]
    if not verses:
        return None
    return {"book": book["name"], "abbrev": book["abbrev"], "chapter": chapter, "verses": verses}


def build_chapters(store: CommentaryStore, out_dir: Path = STATIC_DIR,
                   only_book: str | None = None) -> int:
    """Write one file per chapter that has commentary. Returns the file count."""
    chapters = sorted({(key.abbreviation, key.chapter) for key in store.keys()})

    skipped = 0
    total_files = 0
    for abbrev, chapter in chapters:
        book = BY_ABBREV.get(abbrev)
        if book is None:
            skipped += 1
            continue
        if only_book and book["slug"] != only_book:
            continue
        payload = _chapter_payload(store, book, chapter)
        if payload is None:
            continue
        _write_json_gz(out_dir / "commentary" / book["slug"] / f"{chapter}.json.gz", payload)
        total_files += 1

    print(f"Built {total_files} chapter files.")
    if skipped:
        print(f"  WARNING: {skipped} chapter(s) under unknown book abbreviations skipped",
              file=sys.stderr)
    return total_files


def build_index(store: CommentaryStore, out_dir: Path = STATIC_DIR) -> Path:
    """Write index.json.gz: the canon in order, with commentary counts per chapter."""
    counts: dict[str, dict[int, int]] = {}
    for key in store.keys():
        n = len(store.commentaries(*key))
        per_book = counts.setdefault(key.abbreviation, {})
        per_book[key.chapter] = per_book.get(key.chapter, 0) + n

    books_out = []
    for book in BOOKS:
        book_counts = counts.get(book["abbrev"], {})
        books_out.append({
            "name": book["name"],
            "slug": book["slug"],
            "abbrev": book["abbrev"],
            "order": book["order"],
            "testament": book["testament"],
            "deuterocanonical": book["deuterocanonical"],
            "chapters": book["chapters"],
            "commentary": [
                {"ch": ch, "count": book_counts[ch]}
                for ch in range(1, book["chapters"] + 1)
                if ch in book_counts
            ],
        })

    payload = {
        "books": books_out,
        "sources": [
            {"name": source.value, "short_name": source.short_name, "entries": n}
            for source, n in store.source_counts().items()
        ],
        "plan_days": PLAN_DAYS,
    }
    out_file = out_dir / "index.json.gz"
    _write_json_gz(out_file, payload)
    print(f"Wrote {out_file}  ({sum(1 for b in books_out if b['commentary'])} books with commentary)")
    return out_file


def build_bundle(store: CommentaryStore, out_path: Path) -> Path:
    """Write every entry into one zstd-compressed JSON keyed by abbrev → chapter → verse."""
    out: dict[str, dict[str, dict[str, list[dict]]]] = {}
    for key in sorted(store.keys()):
        groups = store.commentaries_by_source(*key)
        out.setdefault(key.abbreviation, {}).setdefault(str(key.chapter), {})[str(key.verse)] = [
            {"source": source.short_name, "text": [e.text for e in entries]}
            for source, entries in groups
        ]

    json_bytes = json.dumps(out, ensure_ascii=False, separators=(",", ":")).encode("utf-8")
    print(f"Uncompressed size: {len(json_bytes) / 1024:.1f} KB")

    cctx = zstandard.ZstdCompressor(level=19)
    compressed = cctx.compress(json_bytes)
    print(f"Compressed size:   {len(compressed) / 1024:.1f} KB")

    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_bytes(compressed)
    print(f"Written to {out_path}")
    return out_path


def main() -> None:
    ap = argparse.ArgumentParser(description="Generate static JSON for the viewer")
    ap.add_argument("--book", metavar="SLUG", help="Only build chapter files for this book slug")
    ap.add_argument("--clean", action="store_true", help="Delete the output directory before building")
    ap.add_argument("--bundle", action="store_true", help="Also write commentary.json.zst")
    ap.add_argument("--data-dir", type=Path, default=COMMENTARY_DIR,
                    help=f"Directory holding the commentary .tsv files (default: {COMMENTARY_DIR})")
    ap.add_argument("--out-dir", type=Path, default=STATIC_DIR,
                    help=f"Output directory (default: {STATIC_DIR})")
    args = ap.parse_args()

    if not args.data_dir.is_dir():
        print(f"Commentary directory not found at {args.data_dir}. Run fetch_commentary.py first.",
              file=sys.stderr)
        sys.exit(1)

    if args.clean and args.out_dir.exists():
        shutil.rmtree(args.out_dir)
        print(f"Removed {args.out_dir}")

    print(f"Loading commentary from {args.data_dir}")
    store = load_commentary(args.data_dir, verbose=True)

    build_chapters(store, args.out_dir, only_book=args.book)
    if not args.book:          # partial builds leave the plan and index alone
        build_plan(readings(), args.out_dir)
        build_index(store, args.out_dir)
    if args.bundle:
        build_bundle(store, args.out_dir / "commentary.json.zst")


if __name__ == "__main__":
    main()
