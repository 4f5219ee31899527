"""
Canonical book data for the 73-book Douay-Rheims canon.

Each entry:
  name     - canonical display name (also the name used in reading-plan passages)
  slug     - URL/path-safe identifier
  order    - canonical ordering (Old Testament 1-46, New Testament 47-73)
  chapters - number of chapters
  abbrev   - short form used as the key in the commentary resources
  abbrevs  - lowercase aliases without trailing dots, for lenient lookup
  testament, deuterocanonical - display-only grouping

The flattened sequence of (book, chapter) units drives the reading plan.
"""
from __future__ import annotations

import re
from typing import NamedTuple

OLD_TESTAMENT = "Old Testament"
NEW_TESTAMENT = "New Testament"


def _book(order: int, name: str, chapters: int, abbrev: str, abbrevs: list[str],
          deuterocanonical: bool = False) -> dict:
    return {
        "name": name,
        "slug": name.lower().replace(" ", "-"),
        "order": order,
        "chapters": chapters,
        "abbrev": abbrev,
        "abbrevs": abbrevs,
        "testament": OLD_TESTAMENT if order <= 46 else NEW_TESTAMENT,
        "deuterocanonical": deuterocanonical,
    }


BOOKS = [
    # ── Old Testament ────────────────────────────────────────────────────────
    _book( 1, "Genesis",          50, "Gn",    ["gen", "gn"]),
    _book( 2, "Exodus",           40, "Ex",    ["exod", "exo", "ex"]),
    _book( 3, "Leviticus",        27, "Lv",    ["lev", "lv"]),
    _book( 4, "Numbers",          36, "Nm",    ["num", "numb", "nm"]),
    _book( 5, "Deuteronomy",      34, "Dt",    ["deut", "deu", "dt"]),
    _book( 6, "Joshua",           24, "Jos",   ["josh", "jos", "josue"]),
    _book( 7, "Judges",           21, "Jgs",   ["judg", "jdg", "jgs"]),
    _book( 8, "Ruth",              4, "Ru",    ["rth", "ru"]),
    _book( 9, "1 Samuel",         31, "1Sm",   ["1 sam", "1sam", "1 sm", "1sm", "i sam"]),
    _book(10, "2 Samuel",         24, "2Sm",   ["2 sam", "2sam", "2 sm", "2sm", "ii sam"]),
    _book(11, "1 Kings",          22, "1Kgs",  ["1 kgs", "1kgs", "1 ki", "1ki", "i kgs"]),
    _book(12, "2 Kings",          25, "2Kgs",  ["2 kgs", "2kgs", "2 ki", "2ki", "ii kgs"]),
    _book(13, "1 Chronicles",     29, "1Chr",  ["1 chr", "1chr", "1 chron", "i chr", "1 par"]),
    _book(14, "2 Chronicles",     36, "2Chr",  ["2 chr", "2chr", "2 chron", "ii chr", "2 par"]),
    _book(15, "Ezra",             10, "Ezr",   ["ezra", "ezr", "1 esd"]),
    _book(16, "Nehemiah",         13, "Neh",   ["neh", "2 esd"]),
    _book(17, "Tobit",            14, "Tb",    ["tob", "tb", "tobias"], deuterocanonical=True),
    _book(18, "Judith",           16, "Jdt",   ["jdt", "judith"], deuterocanonical=True),
    _book(19, "Esther",           16, "Est",   ["esth", "est"]),
    _book(20, "Job",              42, "Jb",    ["job", "jb"]),
    _book(21, "Psalms",          150, "Ps",    ["ps", "pss", "psa", "psalm"]),
    _book(22, "Proverbs",         31, "Prv",   ["prov", "pro", "prv"]),
    _book(23, "Ecclesiastes",     12, "Eccl",  ["eccl", "eccles", "ecc", "qoh"]),
    _book(24, "Song of Solomon",   8, "Sg",    ["song of sol", "song of songs", "canticles",
                                                "cant", "sg"]),
    _book(25, "Wisdom",           19, "Wis",   ["wis", "wisd", "wisdom of solomon"],
          deuterocanonical=True),
    _book(26, "Sirach",           51, "Sir",   ["sir", "ecclus", "ecclesiasticus"],
          deuterocanonical=True),
    _book(27, "Isaiah",           66, "Is",    ["isa", "is", "isaias"]),
    _book(28, "Jeremiah",         52, "Jer",   ["jer", "jr", "jeremias"]),
    _book(29, "Lamentations",      5, "Lam",   ["lam"]),
    _book(30, "Baruch",            6, "Bar",   ["bar"], deuterocanonical=True),
    _book(31, "Ezekiel",          48, "Ez",    ["ezek", "ezk", "ez", "ezechiel"]),
    _book(32, "Daniel",           14, "Dn",    ["dan", "dn"]),
    _book(33, "Hosea",            14, "Hos",   ["hos", "osee"]),
    _book(34, "Joel",              3, "Jl",    ["jl"]),
    _book(35, "Amos",              9, "Am",    ["amo", "am"]),
    _book(36, "Obadiah",           1, "Ob",    ["obad", "oba", "ob", "abdias"]),
    _book(37, "Jonah",             4, "Jon",   ["jon", "jnh", "jonas"]),
    _book(38, "Micah",             7, "Mi",    ["mic", "mi", "micheas"]),
    _book(39, "Nahum",             3, "Na",    ["nah", "na"]),
    _book(40, "Habakkuk",          3, "Hb",    ["hab", "hb", "habacuc"]),
    _book(41, "Zephaniah",         3, "Zep",   ["zeph", "zep", "sophonias"]),
    _book(42, "Haggai",            2, "Hg",    ["hag", "hg", "aggeus"]),
    _book(43, "Zechariah",        14, "Zec",   ["zech", "zec", "zacharias"]),
    _book(44, "Malachi",           4, "Mal",   ["mal", "malachias"]),
    _book(45, "1 Maccabees",      16, "1Mc",   ["1 macc", "1macc", "1 mac", "1mc", "i macc"],
          deuterocanonical=True),
    _book(46, "2 Maccabees",      15, "2Mc",   ["2 macc", "2macc", "2 mac", "2mc", "ii macc"],
          deuterocanonical=True),

    # ── New Testament ────────────────────────────────────────────────────────
    _book(47, "Matthew",          28, "Mt",    ["matt", "mat", "mt"]),
    _book(48, "Mark",             16, "Mk",    ["mar", "mrk", "mk"]),
    _book(49, "Luke",             24, "Lk",    ["luk", "lk"]),
    _book(50, "John",             21, "Jn",    ["joh", "jhn", "jn"]),
    _book(51, "Acts",             28, "Acts",  ["act"]),
    _book(52, "Romans",           16, "Rom",   ["rom", "ro", "rm"]),
    _book(53, "1 Corinthians",    16, "1Cor",  ["1 cor", "1cor", "i cor", "1 co"]),
    _book(54, "2 Corinthians",    13, "2Cor",  ["2 cor", "2cor", "ii cor", "2 co"]),
    _book(55, "Galatians",         6, "Gal",   ["gal", "ga"]),
    _book(56, "Ephesians",         6, "Eph",   ["eph", "ephes"]),
    _book(57, "Philippians",       4, "Phil",  ["phil", "php"]),
    _book(58, "Colossians",        4, "Col",   ["col"]),
    _book(59, "1 Thessalonians",   5, "1Thes", ["1 thess", "1thess", "1 thes", "1thes", "i thess"]),
    _book(60, "2 Thessalonians",   3, "2Thes", ["2 thess", "2thess", "2 thes", "2thes", "ii thess"]),
    _book(61, "1 Timothy",         6, "1Tm",   ["1 tim", "1tim", "1 tm", "1tm", "i tim"]),
    _book(62, "2 Timothy",         4, "2Tm",   ["2 tim", "2tim", "2 tm", "2tm", "ii tim"]),
    _book(63, "Titus",             3, "Ti",    ["tit", "ti"]),
    _book(64, "Philemon",          1, "Phlm",  ["phlm", "phm", "philem"]),
    _book(65, "Hebrews",          13, "Heb",   ["heb"]),
    _book(66, "James",             5, "Jas",   ["jas", "jam", "jm"]),
    _book(67, "1 Peter",           5, "1Pt",   ["1 pet", "1pet", "1 pt", "1pt", "i pet"]),
    _book(68, "2 Peter",           3, "2Pt",   ["2 pet", "2pet", "2 pt", "2pt", "ii pet"]),
    _book(69, "1 John",            5, "1Jn",   ["1 jn", "1jn", "i john", "1john"]),
    _book(70, "2 John",            1, "2Jn",   ["2 jn", "2jn", "ii john", "2john"]),
    _book(71, "3 John",            1, "3Jn",   ["3 jn", "3jn", "iii john", "3john"]),
    _book(72, "Jude",              1, "Jude",  ["jud"]),
    _book(73, "Apocalypse",       22, "Rv",    ["apoc", "rev", "rv", "revelation"]),
]

# ── Lookup structures ─────────────────────────────────────────────────────────

# exact canonical name → book info (what passage strings are resolved against)
BY_NAME: dict[str, dict] = {b["name"]: b for b in BOOKS}

# slug → book info
BY_SLUG: dict[str, dict] = {b["slug"]: b for b in BOOKS}

# commentary abbreviation → book info
BY_ABBREV: dict[str, dict] = {b["abbrev"]: b for b in BOOKS}

BOOK_NAMES: frozenset[str] = frozenset(BY_NAME)

# alias (lowercase, no dots) → book info; longer aliases first
_abbrev_map: dict[str, dict] = {}
for _b in BOOKS:
    for _abbr in _b["abbrevs"]:
        _abbrev_map[_abbr] = _b
    _abbrev_map[_b["abbrev"].lower()] = _b
    _abbrev_map[_b["name"].lower()] = _b

ABBREV_LOOKUP: dict[str, dict] = dict(
    sorted(_abbrev_map.items(), key=lambda kv: len(kv[0]), reverse=True)
)


class ChapterUnit(NamedTuple):
    """One chapter of one book: the unit the reading plan allocates."""
    book: str
    chapter: int


def chapter_units(books: list[dict] = BOOKS) -> list[ChapterUnit]:
    """Flatten *books* into their chapters, in canonical order."""
    return [
        ChapterUnit(book["name"], chapter)
        for book in books
        for chapter in range(1, book["chapters"] + 1)
    ]


TOTAL_CHAPTERS = sum(b["chapters"] for b in BOOKS)

_NUMBER_RE = re.compile(r"[0-9]+")


def parse_number(s: str) -> int | None:
    """
    Parse a chapter or verse number written as plain ASCII digits.
    Returns None for anything else (signs, spaces, underscores, other scripts).
    """
    if not _NUMBER_RE.fullmatch(s):
        return None
    return int(s)


def books_in_testament(testament: str) -> list[dict]:
    return [b for b in BOOKS if b["testament"] == testament]


def resolve_book(raw: str) -> dict | None:
    """
    Resolve a loosely written book reference ("Gen.", "1 cor", "Gn", "Song of
    Solomon") to its book dict. Returns None if nothing matches.
    """
    s = raw.lower()
    s = re.sub(r'\.', '', s)
    s = re.sub(r'\s+', ' ', s).strip()
    if s in ABBREV_LOOKUP:
        return ABBREV_LOOKUP[s]
    # "1Sm" style keys written with a space ("1 Sm")
    s2 = re.sub(r'^([1-3]) ', r'\1', s)
    return ABBREV_LOOKUP.get(s2)


if __name__ == "__main__":
    print(f"Total books: {len(BOOKS)}")
    print(f"Total chapters: {TOTAL_CHAPTERS}")
    print(f"Total aliases registered: {len(ABBREV_LOOKUP)}")
    assert len(BOOKS) == 73
    assert BY_ABBREV["Gn"]["name"] == "Genesis"
    assert ABBREV_LOOKUP["rom"]["name"] == "Romans"
    assert resolve_book("Song of Solomon")["abbrev"] == "Sg"
    print("All assertions passed.")
