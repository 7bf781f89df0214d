"""Shared utility functions."""
import html
import re
from datetime import date, datetime, tzinfo
from typing import Optional
from urllib.parse import urlparse

import markdown
from bs4 import BeautifulSoup
from dateutil import parser as dateparser
from dateutil import tz

_WHITESPACE_RE = re.compile(r"\s+")
# Markdown syntax that must stay literal in display text; quotes, dashes and dots are left for smarty.
_MARKDOWN_SPECIAL_RE = re.compile(r"([\\`*_\[\]#+!])")
# List markers at the start of a line (`1. `, `- `).
_MARKDOWN_LIST_RE = re.compile(r"^([ \t]*)(\d+\.|-)(?=[ \t]|$)", re.MULTILINE)


def collapse_whitespace(text: str) -> str:
    """Collapse newlines and runs of whitespace into single spaces."""
    return _WHITESPACE_RE.sub(" ", text or "").strip()


def is_absolute_url(url: str) -> bool:
    """True for URLs with an explicit scheme (http:, https:, data:, ...) or protocol-relative ones."""
    if url.startswith("//"):
        return True
    return bool(urlparse(url).scheme)


def normalize_baseurl(baseurl: str) -> str:
    """'bass', '/bass/', '/bass' -> '/bass'; '' and '/' -> ''."""
    stripped = (baseurl or "").strip().strip("/")
    return f"/{stripped}" if stripped else ""


def relative_url(baseurl: str, path: str) -> str:
    """Prefix a site path with the site's base path."""
    path = path or ""
    if not path.startswith("/"):
        path = "/" + path
    return normalize_baseurl(baseurl) + path


def absolute_url(site_url: str, baseurl: str, path: str) -> str:
    """Resolve a site path against the site origin and base path.

    Already absolute URLs (including cross-origin ones, e.g. a CDN) are
    returned unchanged.
    """
    if is_absolute_url(path):
        return path
    return (site_url or "").rstrip("/") + relative_url(baseurl, path)


def parse_timestamp(value, default_tz: Optional[tzinfo] = None) -> datetime:
    """Turn a front-matter date (datetime, date or string) into an aware datetime.

    Naive values are interpreted in ``default_tz`` (UTC when not given).
    Raises ValueError on missing or unparseable input.
    """
    zone = default_tz or tz.UTC
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, date):
        dt = datetime(value.year, value.month, value.day)
    elif isinstance(value, str) and value.strip():
        try:
            dt = dateparser.parse(value.strip())
        except OverflowError as e:
            raise ValueError(f"Invalid timestamp {value!r}: {e}") from e
    else:
        raise ValueError(f"Invalid timestamp {value!r}")
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=zone)
    return dt


def iso8601(dt: datetime) -> str:
    return dt.isoformat(timespec="seconds")


def plain_text(fragment: str) -> str:
    """Strip markup from an HTML fragment, returning collapsed plain text."""
    if not fragment:
        return ""
    return collapse_whitespace(BeautifulSoup(fragment, "html.parser").get_text())


def _escape_list_marker(match) -> str:
    marker = match.group(2)
    return match.group(1) + marker[:-1] + "\\" + marker[-1]


def smartify(text: str) -> str:
    """Apply SmartyPants typography: straight quotes to curly ones, -- to dashes, ... to ellipses."""
    if not text:
        return ""
    escaped = _MARKDOWN_SPECIAL_RE.sub(r"\\\1", html.escape(text, quote=False))
    escaped = _MARKDOWN_LIST_RE.sub(_escape_list_marker, escaped)
    rendered = markdown.markdown(escaped, extensions=["smarty"])
    return BeautifulSoup(rendered, "html.parser").get_text().strip()
