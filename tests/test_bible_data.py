from collections import Counter

from bible_data import (
    BOOKS,
    BOOK_NAMES,
    BY_ABBREV,
    BY_NAME,
    BY_SLUG,
    NEW_TESTAMENT,
    OLD_TESTAMENT,
    TOTAL_CHAPTERS,
    ChapterUnit,
    books_in_testament,
    chapter_units,
    parse_number,
    resolve_book,
)


def test_canon_has_73_books_and_1334_chapters():
    assert len(BOOKS) == 73
    assert TOTAL_CHAPTERS == 1334
    assert len(chapter_units()) == 1334


def test_units_per_book_match_declared_chapter_counts():
    per_book = Counter(unit.book for unit in chapter_units())
    for book in BOOKS:
        assert per_book[book["name"]] == book["chapters"]


def test_units_follow_canonical_order():
    units = chapter_units()
    assert units[0] == ChapterUnit("Genesis", 1)
    assert units[49] == ChapterUnit("Genesis", 50)
    assert units[50] == ChapterUnit("Exodus", 1)
    assert units[-1] == ChapterUnit("Apocalypse", 22)
    assert [b["order"] for b in BOOKS] == list(range(1, 74))


def test_lookup_tables_are_one_to_one():
    assert len(BY_NAME) == len(BY_SLUG) == len(BY_ABBREV) == 73
    assert BOOK_NAMES == set(BY_NAME)
    assert BY_NAME["Song of Solomon"]["slug"] == "song-of-solomon"
    assert BY_ABBREV["Gn"]["name"] == "Genesis"


def test_testaments_and_deuterocanon():
    assert len(books_in_testament(OLD_TESTAMENT)) == 46
    assert len(books_in_testament(NEW_TESTAMENT)) == 27
    deutero = {b["name"] for b in BOOKS if b["deuterocanonical"]}
    assert deutero == {"Tobit", "Judith", "Wisdom", "Sirach", "Baruch",
                       "1 Maccabees", "2 Maccabees"}


def test_resolve_book_accepts_loose_forms():
    assert resolve_book("Gen.")["name"] == "Genesis"
    assert resolve_book("gn")["name"] == "Genesis"
    assert resolve_book("1 Cor")["name"] == "1 Corinthians"
    assert resolve_book("1 Sm")["name"] == "1 Samuel"
    assert resolve_book("Song  of Solomon")["name"] == "Song of Solomon"
    assert resolve_book("Rev")["name"] == "Apocalypse"
    assert resolve_book("Nowhere") is None


def test_parse_number_accepts_only_ascii_digits():
    assert parse_number("12") == 12
    assert parse_number("007") == 7
    for bad in ("", " 1", "1 ", "+2", "-2", "1_0", "٣", "x"):
        assert parse_number(bad) is None
