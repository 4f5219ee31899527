from datetime import date

from bible_data import BY_NAME, ChapterUnit, chapter_units
from reading_plan import (
    PLAN_DAYS,
    DailyReading,
    clamp_day,
    day_for_date,
    expand_passage,
    generate_plan,
    reading_for_day,
    readings,
    upcoming,
)


def test_plan_has_365_numbered_days():
    plan = readings()
    assert len(plan) == PLAN_DAYS
    assert [r.day for r in plan] == list(range(1, 366))


def test_plan_covers_corpus_exactly_once_in_order():
    expanded = [unit for r in readings() for p in r.passages for unit in expand_passage(p)]
    assert expanded == chapter_units()


def test_every_day_has_three_or_four_chapters():
    for reading in readings():
        assert reading.passages
        count = sum(len(expand_passage(p)) for p in reading.passages)
        assert count in (3, 4)


def test_ranges_stay_inside_one_book():
    for reading in readings():
        for passage in reading.passages:
            units = expand_passage(passage)
            assert units
            book = BY_NAME[units[0].book]
            assert all(1 <= u.chapter <= book["chapters"] for u in units)


def test_adjacent_passages_on_a_day_are_not_contiguous():
    # contiguous chapters of the same book are always merged
    for reading in readings():
        units = [expand_passage(p) for p in reading.passages]
        for prev, nxt in zip(units, units[1:]):
            assert not (prev[-1].book == nxt[0].book
                        and nxt[0].chapter == prev[-1].chapter + 1)


def test_first_and_last_days():
    plan = readings()
    assert plan[0].passages == ("Genesis 1-4",)
    assert plan[-1].passages[-1].startswith("Apocalypse")
    assert plan[-1].passages[-1].endswith("22")


def test_plan_is_deterministic_and_memoized():
    assert generate_plan(chapter_units()) == list(readings())
    assert readings() is readings()


def test_runs_are_split_at_book_boundaries():
    units = [ChapterUnit("Genesis", 1), ChapterUnit("Genesis", 2), ChapterUnit("Exodus", 1)]
    assert generate_plan(units, days=1) == [DailyReading(1, ("Genesis 1-2", "Exodus 1"))]


def test_short_corpus_leaves_trailing_days_empty():
    units = chapter_units()[:3]
    plan = generate_plan(units, days=5)
    assert len(plan) == 5
    assert [r.passages for r in plan] == [
        ("Genesis 1",), ("Genesis 2",), ("Genesis 3",), (), (),
    ]


def test_day_lookup_is_clamped():
    assert clamp_day(0) == 1
    assert clamp_day(-5) == 1
    assert clamp_day(400) == 365
    assert reading_for_day(0).day == 1
    assert reading_for_day(1000).day == 365
    assert reading_for_day(42).day == 42


def test_day_for_date():
    start = date(2026, 1, 1)
    assert day_for_date(start, date(2026, 1, 1)) == 1
    assert day_for_date(start, date(2026, 1, 11)) == 11
    assert day_for_date(start, date(2025, 12, 1)) == 1
    assert day_for_date(start, date(2028, 1, 1)) == 365


def test_upcoming():
    assert [r.day for r in upcoming(1)] == [2, 3, 4, 5, 6, 7]
    assert [r.day for r in upcoming(362)] == [363, 364, 365]
    assert upcoming(365) == []


def test_expand_passage():
    assert expand_passage("Jude 1") == [ChapterUnit("Jude", 1)]
    assert expand_passage("Song of Solomon 7-8") == [
        ChapterUnit("Song of Solomon", 7), ChapterUnit("Song of Solomon", 8),
    ]
    assert expand_passage("garbage") == []


def test_empty_plan_has_nothing_scheduled():
    assert reading_for_day(1, ()) == DailyReading(1, ())
    assert reading_for_day(400, ()) == DailyReading(1, ())
    assert upcoming(1, plan=()) == []
