"""
Read-only query surface for the reader front end: the reading plan, passage
resolution and verse commentary, composed explicitly and passed to callers.

Usage:
  python src/reader.py day 42
  python src/reader.py today --start 2026-01-01
  python src/reader.py resolve "Song of Solomon 4"
  python src/reader.py verse Gn 1 1
  python src/reader.py sources               # entries loaded per commentary
"""
from __future__ import annotations

import argparse
import sys
from datetime import date
from pathlib import Path

from bible_data import BY_NAME, resolve_book
from commentary import COMMENTARY_DIR, CommentaryEntry, CommentarySource, CommentaryStore, load_commentary
from passage import ParsedPassage, parse_passage
from reading_plan import DailyReading, day_for_date, reading_for_day, readings, upcoming


class Reader:
    def __init__(self, plan: tuple[DailyReading, ...], store: CommentaryStore,
                 books: dict[str, dict] = BY_NAME):
        self.plan = plan
        self.store = store
        self.books = books

    @classmethod
    def from_data_dir(cls, data_dir: Path = COMMENTARY_DIR, verbose: bool = False) -> "Reader":
        return cls(readings(), load_commentary(data_dir, verbose=verbose))

    def reading_for_day(self, day: int) -> DailyReading:
        return reading_for_day(day, self.plan)

    def today(self, start: date, today: date | None = None) -> DailyReading:
        return self.reading_for_day(day_for_date(start, today, len(self.plan)))

    def upcoming(self, day: int, count: int = 6) -> list[DailyReading]:
        return upcoming(day, count, self.plan)

    def resolve(self, passage: str) -> ParsedPassage:
        return parse_passage(passage, self.books)

    def commentary(self, abbreviation: str, chapter: int,
                   verse: int) -> list[tuple[CommentarySource, list[CommentaryEntry]]]:
        return self.store.commentaries_by_source(abbreviation, chapter, verse)


def _print_reading(reading: DailyReading) -> None:
    print(f"Day {reading.day}: {', '.join(reading.passages) or '(nothing scheduled)'}")


def main() -> None:
    ap = argparse.ArgumentParser(description="Query the reading plan and commentary")
    ap.add_argument("--data-dir", type=Path, default=COMMENTARY_DIR,
                    help=f"Directory holding the commentary .tsv files (default: {COMMENTARY_DIR})")
    sub = ap.add_subparsers(dest="command", required=True)

    p_day = sub.add_parser("day", help="Reading for a plan day")
    p_day.add_argument("day", type=int)

    p_today = sub.add_parser("today", help="Today's reading for a plan started on --start")
    p_today.add_argument("--start", type=date.fromisoformat, required=True, metavar="YYYY-MM-DD")

    p_resolve = sub.add_parser("resolve", help="Resolve a passage like 'Genesis 1-3'")
    p_resolve.add_argument("passage")

    p_verse = sub.add_parser("verse", help="Commentary on a verse")
    p_verse.add_argument("book")
    p_verse.add_argument("chapter", type=int)
    p_verse.add_argument("verse", type=int)

    sub.add_parser("sources", help="Entries loaded per commentary source")

    args = ap.parse_args()

    if args.command == "sources":
        print(f"Loading commentary from {args.data_dir}")
        reader = Reader.from_data_dir(args.data_dir, verbose=True)
        print(f"Total: {len(reader.store)} entries")
        return

    if args.command == "verse":
        book = resolve_book(args.book)
        if book is None:
            print(f"Unknown book: {args.book}", file=sys.stderr)
            sys.exit(1)
        reader = Reader.from_data_dir(args.data_dir)
        groups = reader.commentary(book["abbrev"], args.chapter, args.verse)
        if not groups:
            print(f"No commentary on {book['name']} {args.chapter}:{args.verse}")
            return
        for source, entries in groups:
            print(f"\n── {source.value} ({len(entries)}) ──")
            for entry in entries:
                print(entry.text)
        return

    # plan queries don't need the commentary loaded
    reader = Reader(readings(), CommentaryStore({}))

    if args.command == "day":
        _print_reading(reader.reading_for_day(args.day))
    elif args.command == "today":
        day = day_for_date(args.start)
        _print_reading(reader.reading_for_day(day))
        for reading in reader.upcoming(day):
            _print_reading(reading)
    elif args.command == "resolve":
        parsed = reader.resolve(args.passage)
        if parsed.book is None:
            print(f"Unresolved: {args.passage}")
        else:
            print(f"{parsed.book['name']} chapter {parsed.start_chapter}")


if __name__ == "__main__":
    main()
