"""
Download the commentary TSV files into data/commentary/.

Files are fetched either straight from a base URL ({base}/{name}.tsv) or by
scraping an HTML index page for links to them. A manifest.json records the
status of every source so the run can be resumed.

Usage:
  python src/fetch_commentary.py --base-url https://example.org/commentary
  python src/fetch_commentary.py --index-url https://example.org/downloads.html
  python src/fetch_commentary.py --base-url URL --force      # re-download cached files
"""
from __future__ import annotations

import argparse
import json
import sys
import time
from pathlib import Path
from urllib.parse import urljoin

import requests
from bs4 import BeautifulSoup

from commentary import COMMENTARY_DIR, SOURCE_PRIORITY, CommentarySource

MANIFEST_NAME = "manifest.json"

HEADERS = {
    "User-Agent": "DouayReaderBot/1.0 (commentary data fetch)",
}

# Bytes inspected when deciding whether a response is a TSV file
_SNIFF_BYTES = 2048


def _looks_tabular(content: bytes) -> bool:
    return b"\t" in content[:_SNIFF_BYTES]


def find_source_links(session: requests.Session, index_url: str) -> dict[CommentarySource, str]:
    """
    Scrape *index_url* and return the download link for each source whose
    file name ({name}.tsv) appears among the page's links.
    """
    print(f"Fetching index: {index_url}")
    resp = session.get(index_url, timeout=30)
    resp.raise_for_status()
    soup = BeautifulSoup(resp.text, "lxml")

    links: dict[CommentarySource, str] = {}
    for a in soup.find_all("a", href=True):
        href = a["href"].split("?")[0].split("#")[0]
        name = href.rstrip("/").rsplit("/", 1)[-1]
        for source in SOURCE_PRIORITY:
            if source not in links and name == f"{source.filename}.tsv":
                links[source] = urljoin(index_url, href)
    return links


def download_source(
    source: CommentarySource,
    url: str,
    session: requests.Session,
    out_dir: Path,
    force: bool = False,
) -> dict:
    """
    Download one source file. Returns a manifest record with 'status' set to
    cached, downloaded or failed.
    """
    out_path = out_dir / f"{source.filename}.tsv"
    record = {"source": source.value, "filename": out_path.name, "url": url}

    if not force and out_path.exists() and out_path.stat().st_size > 0:
        return {**record, "status": "cached"}

    try:
        resp = session.get(url, timeout=60)
        resp.raise_for_status()
    except requests.RequestException as e:
        print(f"  ERROR: {source.short_name}: {e}", file=sys.stderr)
        return {**record, "status": "failed", "error": str(e)}

    if not _looks_tabular(resp.content):
        print(f"  ERROR: {source.short_name}: {url} does not look like a TSV file",
              file=sys.stderr)
        return {**record, "status": "failed", "error": "not tab-separated"}

    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_bytes(resp.content)
    size_kb = out_path.stat().st_size // 1024
    print(f"    Saved {out_path.name} ({size_kb} KB)")
    return {**record, "status": "downloaded"}


def load_manifest(out_dir: Path) -> dict[str, dict]:
    """Existing manifest records keyed by file name."""
    path = out_dir / MANIFEST_NAME
    if not path.exists():
        return {}
    with open(path, encoding="utf-8") as f:
        entries = json.load(f)
    return {e["filename"]: e for e in entries}


def save_manifest(out_dir: Path, results: list[dict]) -> Path:
    out_dir.mkdir(parents=True, exist_ok=True)
    path = out_dir / MANIFEST_NAME
    with open(path, "w", encoding="utf-8") as f:
        json.dump(results, f, indent=2, ensure_ascii=False)
    return path


def fetch_all(
    session: requests.Session,
    out_dir: Path,
    base_url: str | None = None,
    index_url: str | None = None,
    delay: float = 0.5,
    force: bool = False,
) -> list[dict]:
    if index_url:
        links = find_source_links(session, index_url)
    else:
        base = (base_url or "").rstrip("/")
        links = {source: f"{base}/{source.filename}.tsv" for source in SOURCE_PRIORITY}

    cached_manifest = load_manifest(out_dir)

    results: list[dict] = []
    n = len(SOURCE_PRIORITY)
    for i, source in enumerate(SOURCE_PRIORITY, 1):
        filename = f"{source.filename}.tsv"
        url = links.get(source)
        if url is None:
            cached = cached_manifest.get(filename)
            if (not force and cached and cached.get("status") in ("downloaded", "cached")
                    and (out_dir / filename).exists()):
                results.append({**cached, "status": "cached"})
                print(f"  [{i}/{n}] cached     {filename}")
                continue
            print(f"  [{i}/{n}] MISSING    {filename} not linked from index")
            results.append({"source": source.value, "filename": filename,
                            "url": None, "status": "failed", "error": "not found in index"})
            continue
        if i > 1 and delay:
            time.sleep(delay)
        result = download_source(source, url, session, out_dir, force=force)
        results.append(result)
        print(f"  [{i}/{n}] {result['status']:<10} {filename}")

    save_manifest(out_dir, results)
    return results


def main() -> None:
    ap = argparse.ArgumentParser(description="Download the commentary TSV files")
    group = ap.add_mutually_exclusive_group(required=True)
    group.add_argument("--base-url", help="URL prefix the .tsv files live under")
    group.add_argument("--index-url", help="HTML page linking to the .tsv files")
    ap.add_argument("--out-dir", type=Path, default=COMMENTARY_DIR,
                    help=f"Where to save the files (default: {COMMENTARY_DIR})")
    ap.add_argument("--delay", type=float, default=0.5, metavar="SECS",
                    help="Seconds to wait between HTTP requests (default: 0.5)")
    ap.add_argument("--force", action="store_true",
                    help="Re-download files that are already present")
    args = ap.parse_args()

    session = requests.Session()
    session.headers.update(HEADERS)

    try:
        results = fetch_all(session, args.out_dir, base_url=args.base_url,
                            index_url=args.index_url, delay=args.delay, force=args.force)
    except requests.RequestException as e:
        print(f"ERROR: Could not fetch index: {e}", file=sys.stderr)
        sys.exit(1)

    ok = sum(1 for r in results if r["status"] in ("downloaded", "cached"))
    failed = len(results) - ok
    print(f"\nSummary: {ok}/{len(results)} available, {failed} failed")
    print(f"Manifest written to {args.out_dir / MANIFEST_NAME}")


if __name__ == "__main__":
    main()
