"""Jekyll-style site source loader.

Builds the ``Site`` and its ordered ``ContentEntry`` list from a source tree:

    _config.yml              site configuration
    _data/authors.yml        author registry
    _posts/YYYY-MM-DD-slug.md
    _drafts/slug.md          (only loaded with show_drafts: true)
    about.md, index.html     pages (front matter with a `date`; undated pages are not
                             content entries and are left to the site build)
    images/logo.png          static files (no front matter)

Directories starting with ``_`` or ``.`` are skipped except the ones above;
so is the destination directory.
"""
import logging
import re
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml

from sitefeed.config import load_author_registry, load_config, merge_config, site_timezone
from sitefeed.models import ContentEntry, Site, author_ref_from_value
from sitefeed.utils import parse_timestamp

logger = logging.getLogger(__name__)

_POST_NAME_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})-(.+)$")
_FRONT_MATTER_RE = re.compile(r"\A---[ \t]*\r?\n(.*?)^(?:---|\.\.\.)[ \t]*\r?$\n?", re.DOTALL | re.MULTILINE)
_MARKUP_EXTS = {".md", ".markdown", ".mkd", ".html", ".htm"}
_ENTRY_FIELDS = {"title", "date", "last_modified_at", "excerpt", "image", "author",
                 "draft", "published", "permalink"}


def split_front_matter(raw: str) -> Tuple[Optional[Dict[str, Any]], str]:
    """Return (front matter or None, body). Malformed YAML is treated as no front matter."""
    match = _FRONT_MATTER_RE.match(raw)
    if not match:
        return None, raw
    try:
        data = yaml.safe_load(match.group(1)) or {}
    except yaml.YAMLError as e:
        logger.warning(f"[Loader] Bad front matter: {e}")
        return None, raw
    if not isinstance(data, dict):
        data = {}
    return data, raw[match.end():]


def load_site(source: Path, destination: Optional[Path] = None,
              overrides: Optional[Dict[str, Any]] = None) -> Site:
    """Load config + author registry for a source directory."""
    source = Path(source)
    config = load_config(source)
    if overrides:
        config = merge_config(config, overrides)
    authors = load_author_registry(source)
    if destination is None:
        destination = source / str(config.get("destination") or "_site")
    return Site.from_config(config, authors=authors, source=source, destination=Path(destination))


def _output_ext(path: Path) -> str:
    return ".html" if path.suffix.lower() in _MARKUP_EXTS else path.suffix.lower()


def _make_entry(path: Path, meta: Dict[str, Any], body: str, url: str, site: Site,
                default_date: Any = None, draft: bool = False) -> ContentEntry:
    return ContentEntry(
        url=str(meta.get("permalink") or url),
        title=str(meta.get("title") or ""),
        body=body.strip("\n"),
        date=meta.get("date", default_date),
        last_modified_at=meta.get("last_modified_at"),
        excerpt=meta.get("excerpt"),
        image=meta.get("image"),
        author=author_ref_from_value(meta.get("author"), site.authors),
        draft=bool(meta.get("draft", draft)),
        published=meta.get("published", True) is not False,
        output_ext=_output_ext(path),
        path=str(path),
        data={k: v for k, v in meta.items() if k not in _ENTRY_FIELDS},
    )


def _post_url(slug: str, when: Any, site: Site) -> str:
    try:
        dt = parse_timestamp(when, site_timezone(site))
    except ValueError:
        return f"/{slug}.html"
    return f"/{dt:%Y/%m/%d}/{slug}.html"


def _load_post(path: Path, site: Site, draft: bool = False) -> Optional[ContentEntry]:
    meta, body = split_front_matter(path.read_text(encoding="utf-8", errors="replace"))
    meta = meta or {}
    stem = path.stem
    match = _POST_NAME_RE.match(stem)
    filename_date = None
    if match:
        filename_date = date(int(match.group(1)), int(match.group(2)), int(match.group(3)))
        slug = match.group(4)
    elif draft:
        slug = stem
    else:
        logger.warning(f"[Loader] Skipping post with invalid filename: {path.name}")
        return None
    when = meta.get("date", filename_date)
    if when is None and draft:
        when = datetime.fromtimestamp(path.stat().st_mtime)
    return _make_entry(path, meta, body, _post_url(slug, when, site), site, default_date=when, draft=draft)


def _is_skipped(rel: Path, site: Site) -> bool:
    for part in rel.parts:
        if part.startswith((".", "_")):
            return True
    if site.destination is not None and site.source is not None:
        try:
            (site.source / rel).resolve().relative_to(Path(site.destination).resolve())
            return True
        except ValueError:
            pass
    return False


def _page_url(rel: Path) -> str:
    if rel.suffix.lower() in _MARKUP_EXTS:
        rel = rel.with_suffix(".html")
    url = "/" + rel.as_posix()
    if url.endswith("/index.html"):
        url = url[: -len("index.html")]
    return url


def load_entries(site: Site) -> List[ContentEntry]:
    """All content entries of the site: posts newest first, then pages, then static files."""
    if site.source is None:
        raise ValueError("Site has no source directory")
    source = Path(site.source)
    posts: List[ContentEntry] = []
    for path in sorted((source / "_posts").rglob("*")) if (source / "_posts").is_dir() else []:
        if path.is_file() and path.suffix.lower() in _MARKUP_EXTS:
            entry = _load_post(path, site)
            if entry is not None:
                posts.append(entry)
    if site.config.get("show_drafts") and (source / "_drafts").is_dir():
        for path in sorted((source / "_drafts").rglob("*")):
            if path.is_file() and path.suffix.lower() in _MARKUP_EXTS:
                entry = _load_post(path, site, draft=True)
                if entry is not None:
                    posts.append(entry)
    # Jekyll enumerates posts newest first; filename order breaks date ties.
    posts.reverse()
    tz = site_timezone(site)
    posts.sort(key=lambda e: _sort_key(e, tz), reverse=True)

    pages: List[ContentEntry] = []
    statics: List[ContentEntry] = []
    for path in sorted(source.rglob("*")):
        rel = path.relative_to(source)
        if not path.is_file() or _is_skipped(rel, site):
            continue
        meta, body = None, ""
        with open(path, "rb") as f:
            has_front_matter = f.read(3) == b"---"
        if has_front_matter:
            meta, body = split_front_matter(path.read_text(encoding="utf-8", errors="replace"))
        if meta is None:
            statics.append(ContentEntry(url="/" + rel.as_posix(), static=True,
                                        output_ext=path.suffix.lower(), path=str(path)))
        elif "date" in meta:
            pages.append(_make_entry(path, meta, body, _page_url(rel), site))
    logger.info(f"[Loader] {len(posts)} posts, {len(pages)} pages, {len(statics)} static files")
    return posts + pages + statics


def _sort_key(entry: ContentEntry, tz) -> datetime:
    try:
        return parse_timestamp(entry.date, tz)
    except ValueError:
        return datetime.min.replace(tzinfo=timezone.utc)
