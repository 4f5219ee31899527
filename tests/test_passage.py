from bible_data import BOOK_NAMES, BY_NAME
from passage import ParsedPassage, format_passage, parse_passage, parse_range


def test_parse_range_passage_gives_start_chapter():
    parsed = parse_passage("Genesis 1-3")
    assert parsed.book is BY_NAME["Genesis"]
    assert parsed.start_chapter == 1


def test_parse_multi_word_book_name():
    parsed = parse_passage("Song of Solomon 4")
    assert parsed.book["name"] == "Song of Solomon"
    assert parsed.start_chapter == 4


def test_unknown_book_is_unresolved_not_an_error():
    assert parse_passage("Unknown 9") == ParsedPassage(None, 9)


def test_too_few_tokens():
    assert parse_passage("Genesis") == ParsedPassage(None, 1)
    assert parse_passage("") == ParsedPassage(None, 1)


def test_unreadable_chapter_defaults_to_one():
    parsed = parse_passage("Genesis x-3")
    assert parsed.book["name"] == "Genesis"
    assert parsed.start_chapter == 1


def test_book_match_is_exact():
    assert parse_passage("genesis 2").book is None
    assert parse_passage("Genesis  2").book is None


def test_name_container_returns_name():
    assert parse_passage("1 John 5", BOOK_NAMES) == ParsedPassage("1 John", 5)


def test_format_and_parse_range():
    assert format_passage("Genesis", 1) == "Genesis 1"
    assert format_passage("Genesis", 1, 1) == "Genesis 1"
    assert format_passage("Genesis", 1, 4) == "Genesis 1-4"
    assert parse_range("Song of Solomon 3-8") == ("Song of Solomon", 3, 8)
    assert parse_range("Jude 1") == ("Jude", 1, 1)


def test_parse_range_rejects_malformed():
    assert parse_range("Genesis") is None
    assert parse_range("Genesis a-b") is None
    assert parse_range("Genesis 4-2") is None
    assert parse_range("Genesis 0") is None


def test_chapter_token_must_be_plain_digits():
    assert parse_passage("Genesis +2").start_chapter == 1
    assert parse_passage("Genesis 1_0").start_chapter == 1
    assert parse_passage("Genesis 0").start_chapter == 0
    assert parse_range("Genesis 1_0") is None
    assert parse_range("Genesis +1-3") is None
