from datetime import date

import pytest

from commentary import CommentarySource
from reader import Reader


@pytest.fixture
def reader(tmp_path):
    (tmp_path / "haydock.tsv").write_text("Gn\t1:1\tIn the beginning...\n", encoding="utf-8")
    (tmp_path / "lapide.tsv").write_text("Gn\t1:1\tIn principio\n", encoding="utf-8")
    return Reader.from_data_dir(tmp_path)


def test_reading_for_day_is_clamped(reader):
    assert reader.reading_for_day(1).passages == ("Genesis 1-4",)
    assert reader.reading_for_day(0).day == 1
    assert reader.reading_for_day(366).day == 365


def test_today(reader):
    start = date(2026, 3, 1)
    assert reader.today(start, date(2026, 3, 2)).day == 2
    assert [r.day for r in reader.upcoming(2, count=2)] == [3, 4]


def test_resolve_schedule_entry(reader):
    passage = reader.reading_for_day(1).passages[0]
    parsed = reader.resolve(passage)
    assert parsed.book["name"] == "Genesis"
    assert parsed.start_chapter == 1
    assert reader.resolve("Unknown 9").book is None


def test_commentary_grouped_by_source(reader):
    groups = reader.commentary("Gn", 1, 1)
    assert [source for source, _ in groups] == [CommentarySource.HAYDOCK, CommentarySource.LAPIDE]
    assert groups[0][1][0].text == "In the beginning..."
    assert reader.commentary("Gn", 50, 26) == []
