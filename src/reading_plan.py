"""
"Bible in a year" reading plan: every chapter of the 73 books, in canonical
order, spread over 365 days (three or four chapters a day).

Consecutive chapters of the same book read on the same day are collapsed into
one passage ("Genesis 1-4").

Usage:
  python src/reading_plan.py                  # summary
  python src/reading_plan.py --day 42         # one day
  python src/reading_plan.py --all            # the whole plan
  python src/reading_plan.py --start 2026-01-01   # today's reading for a plan begun then
"""
from __future__ import annotations

import argparse
from dataclasses import dataclass
from datetime import date
from functools import lru_cache

from bible_data import ChapterUnit, chapter_units
from passage import format_passage, parse_range

PLAN_DAYS = 365


@dataclass(frozen=True)
class DailyReading:
    day: int
    passages: tuple[str, ...]


def _group_runs(units: list[ChapterUnit]) -> list[str]:
    """Collapse runs of consecutive chapters of one book into passage strings."""
    passages: list[str] = []
    i = 0
    while i < len(units):
        book, start = units[i]
        end = start
        while (i + 1 < len(units)
               and units[i + 1].book == book
               and units[i + 1].chapter == end + 1):
            i += 1
            end = units[i].chapter
        passages.append(format_passage(book, start, end))
        i += 1
    return passages


def generate_plan(units: list[ChapterUnit], days: int = PLAN_DAYS) -> list[DailyReading]:
    """
    Partition *units* into *days* readings.

    Each day takes ceil(remaining units / remaining days), at least one, so the
    last day always finishes the corpus. If the units run out early the
    remaining days are still emitted, with no passages.
    """
    total = len(units)
    readings: list[DailyReading] = []
    idx = 0
    for day in range(1, days + 1):
        remaining = total - idx
        remaining_days = days + 1 - day
        today_count = max(1, -(-remaining // remaining_days))
        end_idx = min(idx + today_count, total)
        readings.append(DailyReading(day, tuple(_group_runs(units[idx:end_idx]))))
        idx = end_idx
    return readings


@lru_cache(maxsize=1)
def readings() -> tuple[DailyReading, ...]:
    """The plan for the canonical corpus, computed once per process."""
    return tuple(generate_plan(chapter_units()))


def clamp_day(day: int, days: int = PLAN_DAYS) -> int:
    return min(max(day, 1), days)


def reading_for_day(day: int, plan: tuple[DailyReading, ...] | None = None) -> DailyReading:
    """
    Reading for *day*; days outside the plan are clamped to its first/last day.
    An empty plan has nothing scheduled: day 1 with no passages.
    """
    plan = readings() if plan is None else plan
    if not plan:
        return DailyReading(1, ())
    return plan[clamp_day(day, len(plan)) - 1]


def day_for_date(start: date, today: date | None = None, days: int = PLAN_DAYS) -> int:
    """Plan day for *today* when the plan was begun on *start* (day 1)."""
    today = today or date.today()
    return clamp_day((today - start).days + 1, days)


def upcoming(day: int, count: int = 6,
             plan: tuple[DailyReading, ...] | None = None) -> list[DailyReading]:
    """The readings after *day*, at most *count* of them."""
    plan = readings() if plan is None else plan
    start = clamp_day(day, len(plan))
    end = min(start + count, len(plan))
    return list(plan[start:end])


def expand_passage(passage: str) -> list[ChapterUnit]:
    """Expand "Book C1-C2" back into its chapter units ([] if malformed)."""
    parsed = parse_range(passage)
    if parsed is None:
        return []
    book, start, end = parsed
    return [ChapterUnit(book, ch) for ch in range(start, end + 1)]


def _print_reading(reading: DailyReading) -> None:
    passages = ", ".join(reading.passages) or "(nothing scheduled)"
    print(f"  Day {reading.day:>3}  {passages}")


def main() -> None:
    ap = argparse.ArgumentParser(description="Print the 365-day reading plan")
    ap.add_argument("--day", type=int, metavar="N", help="Show the reading for day N (clamped to 1-365)")
    ap.add_argument("--all", action="store_true", help="Show every day")
    ap.add_argument("--start", type=date.fromisoformat, metavar="YYYY-MM-DD",
                    help="Show today's and upcoming readings for a plan started on this date")
    args = ap.parse_args()

    plan = readings()

    if args.all:
        for reading in plan:
            _print_reading(reading)
        return

    if args.day is not None:
        _print_reading(reading_for_day(args.day))
        return

    if args.start is not None:
        day = day_for_date(args.start)
        print(f"Day {day} of {PLAN_DAYS}")
        _print_reading(reading_for_day(day))
        print("\n  Upcoming:")
        for reading in upcoming(day):
            _print_reading(reading)
        return

    counts = [sum(len(expand_passage(p)) for p in r.passages) for r in plan]
    print(f"Days: {len(plan)}")
    print(f"Chapters: {sum(counts)}  (min {min(counts)}, max {max(counts)} per day)")


if __name__ == "__main__":
    main()
