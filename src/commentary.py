"""
Verse-keyed commentary: loads the three bundled commentaries and answers
per-verse lookups.

Each source is a tab-separated file in the commentary directory:

  abbreviation<TAB>chapter:verse<TAB>text

with an optional "Book ..." header on the first line. Rows that do not fit
that shape are skipped. A missing or undecodable file leaves its source
empty; the others still load.
"""
from __future__ import annotations

import sys
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Iterator, Mapping, NamedTuple

from bible_data import parse_number

PROJECT_ROOT = Path(__file__).parent.parent
DATA_DIR = PROJECT_ROOT / "data"
COMMENTARY_DIR = DATA_DIR / "commentary"


class CommentarySource(Enum):
    HAYDOCK = "Haydock"
    LAPIDE = "Cornelius à Lapide"
    DOUAI_1609 = "Douai 1609"

    @property
    def filename(self) -> str:
        return _FILENAMES[self]

    @property
    def short_name(self) -> str:
        return _SHORT_NAMES[self]


_FILENAMES = {
    CommentarySource.HAYDOCK: "haydock",
    CommentarySource.LAPIDE: "lapide",
    CommentarySource.DOUAI_1609: "douai-1609",
}

_SHORT_NAMES = {
    CommentarySource.HAYDOCK: "Haydock",
    CommentarySource.LAPIDE: "Lapide",
    CommentarySource.DOUAI_1609: "Douai 1609",
}

# Order in which grouped results are presented, whatever order files load in.
SOURCE_PRIORITY: tuple[CommentarySource, ...] = (
    CommentarySource.HAYDOCK,
    CommentarySource.LAPIDE,
    CommentarySource.DOUAI_1609,
)


class VerseKey(NamedTuple):
    abbreviation: str
    chapter: int
    verse: int


@dataclass(frozen=True)
class CommentaryEntry:
    source: CommentarySource
    abbreviation: str
    chapter: int
    verse: int
    text: str

    @property
    def key(self) -> VerseKey:
        return VerseKey(self.abbreviation, self.chapter, self.verse)


class LoadState(str, Enum):
    NOT_LOADED = "not_loaded"
    LOADING = "loading"
    LOADED = "loaded"


# ── Parsing ───────────────────────────────────────────────────────────────────

def parse_line(source: CommentarySource, line: str, line_no: int = 1) -> CommentaryEntry | None:
    """
    Turn one TSV line into an entry. Returns None for headers (line 0 only)
    and for rows that are short or carry an unreadable chapter:verse field.
    """
    parts = line.split("\t")
    if len(parts) < 3:
        return None

    abbrev, verse_ref, text = parts[0], parts[1], parts[2]

    if line_no == 0 and abbrev.lower() == "book":
        return None

    ref_parts = verse_ref.split(":")
    if len(ref_parts) != 2:
        return None
    chapter = parse_number(ref_parts[0])
    verse = parse_number(ref_parts[1])
    if chapter is None or verse is None:
        return None

    return CommentaryEntry(source, abbrev, chapter, verse, text)


def read_source(source: CommentarySource, path: Path) -> list[CommentaryEntry]:
    """Read every usable row of *path*. A missing, unreadable or non-UTF-8 file gives []."""
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        print(f"  WARNING: {source.short_name} commentary unavailable ({path}): {e}",
              file=sys.stderr)
        return []

    entries = []
    for line_no, line in enumerate(text.splitlines()):
        entry = parse_line(source, line, line_no)
        if entry is not None:
            entries.append(entry)
    return entries


# ── Store ─────────────────────────────────────────────────────────────────────

class CommentaryStore:
    """
    Read-only index of commentary entries keyed by (abbreviation, chapter, verse).

    Built by CommentaryLoader; entries under a key keep file order within a
    source, and grouped queries walk SOURCE_PRIORITY.
    """

    def __init__(self, index: Mapping[VerseKey, tuple[CommentaryEntry, ...]]):
        self._index = MappingProxyType(
            {key: tuple(entries) for key, entries in index.items() if entries}
        )

    def __len__(self) -> int:
        return sum(len(entries) for entries in self._index.values())

    def keys(self) -> Iterator[VerseKey]:
        return iter(self._index)

    def commentaries(self, abbreviation: str, chapter: int, verse: int) -> list[CommentaryEntry]:
        return list(self._index.get(VerseKey(abbreviation, chapter, verse), ()))

    def commentaries_by_source(
        self, abbreviation: str, chapter: int, verse: int,
    ) -> list[tuple[CommentarySource, list[CommentaryEntry]]]:
        entries = self._index.get(VerseKey(abbreviation, chapter, verse), ())
        groups = []
        for source in SOURCE_PRIORITY:
            source_entries = [e for e in entries if e.source is source]
            if source_entries:
                groups.append((source, source_entries))
        return groups

    def has_commentary(self, abbreviation: str, chapter: int, verse: int) -> bool:
        return bool(self._index.get(VerseKey(abbreviation, chapter, verse)))

    def available_sources(self, abbreviation: str, chapter: int, verse: int) -> list[CommentarySource]:
        return [source for source, _ in self.commentaries_by_source(abbreviation, chapter, verse)]

    def verses_with_commentary(self, abbreviation: str, chapter: int) -> list[int]:
        return sorted(
            key.verse for key in self._index
            if key.abbreviation == abbreviation and key.chapter == chapter
        )

    def chapter_entries(self, abbreviation: str, chapter: int) -> dict[int, list[CommentaryEntry]]:
        """All entries of one chapter, verse → entries, in verse order."""
        return {
            verse: self.commentaries(abbreviation, chapter, verse)
            for verse in self.verses_with_commentary(abbreviation, chapter)
        }

    def source_counts(self) -> dict[CommentarySource, int]:
        counts = {source: 0 for source in SOURCE_PRIORITY}
        for entries in self._index.values():
            for entry in entries:
                counts[entry.source] = counts.get(entry.source, 0) + 1
        return counts


class CommentaryLoader:
    """
    Builds a CommentaryStore from the TSV files in *data_dir*.

    state goes NOT_LOADED → LOADING → LOADED once; the store is only returned
    after every source has been read. To reload, make a new loader.
    """

    def __init__(self, data_dir: Path = COMMENTARY_DIR,
                 sources: tuple[CommentarySource, ...] = SOURCE_PRIORITY,
                 verbose: bool = False):
        self.data_dir = Path(data_dir)
        self.sources = sources
        self.verbose = verbose
        self.state = LoadState.NOT_LOADED
        self._store: CommentaryStore | None = None

    def path_for(self, source: CommentarySource) -> Path:
        return self.data_dir / f"{source.filename}.tsv"

    def load(self) -> CommentaryStore:
        if self._store is not None:
            return self._store

        self.state = LoadState.LOADING
        index: dict[VerseKey, list[CommentaryEntry]] = {}
        for source in self.sources:
            entries = read_source(source, self.path_for(source))
            for entry in entries:
                index.setdefault(entry.key, []).append(entry)
            if self.verbose:
                print(f"  {source.short_name:<12} {len(entries):>7} entries")

        self._store = CommentaryStore(index)
        self.state = LoadState.LOADED
        return self._store


def load_commentary(data_dir: Path = COMMENTARY_DIR, verbose: bool = False) -> CommentaryStore:
    return CommentaryLoader(data_dir, verbose=verbose).load()
