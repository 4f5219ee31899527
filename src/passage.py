"""
Passage-range strings: "Genesis 1" or "Genesis 1-3".

The reading plan emits these; the reader resolves them back to a book and a
starting chapter so a plan entry can be opened.
"""
from __future__ import annotations

from typing import Any, Container, Mapping, NamedTuple

from bible_data import BY_NAME, parse_number


class ParsedPassage(NamedTuple):
    book: Any | None
    start_chapter: int


def format_passage(book: str, start: int, end: int | None = None) -> str:
    if end is None or end == start:
        return f"{book} {start}"
    return f"{book} {start}-{end}"


def parse_passage(passage: str, books: Mapping[str, Any] | Container[str] = BY_NAME) -> ParsedPassage:
    """
    Resolve a passage string to (book, starting chapter).

    The last space-separated token is the chapter part; everything before it is
    the book name, so multi-word names ("Song of Solomon") survive. *books* is
    matched exactly: a mapping yields its value for the name, any other
    container yields the name itself. An unknown book gives book=None, an
    unreadable chapter gives 1. Never raises.
    """
    parts = passage.split(" ")
    if len(parts) < 2:
        return ParsedPassage(None, 1)

    name = " ".join(parts[:-1])
    chapter = parse_number(parts[-1].split("-")[0])
    if chapter is None:
        chapter = 1

    book = None
    if name in books:
        book = books[name] if hasattr(books, "keys") else name
    return ParsedPassage(book, chapter)


def parse_range(passage: str) -> tuple[str, int, int] | None:
    """
    Decode a passage string fully into (book name, first chapter, last chapter).
    Returns None if the string is not a well-formed range.
    """
    name, sep, chapters = passage.rpartition(" ")
    if not sep or not name:
        return None
    start_str, dash, end_str = chapters.partition("-")
    start = parse_number(start_str)
    end = parse_number(end_str) if dash else start
    if start is None or end is None:
        return None
    if start < 1 or end < start:
        return None
    return name, start, end
