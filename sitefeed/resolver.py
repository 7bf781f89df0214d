"""Per-entry resolution of JSON Feed item fields.

Only the URL, title, body and publication date are required. Every other
field degrades to omission: a failure while resolving it is logged and the
key is left out of the item, never emitted as null, "" or {}.
"""
import logging
from datetime import datetime
from typing import Any, Dict, Optional

from sitefeed.config import site_timezone
from sitefeed.models import (
    AuthorRef, AuthorReference, ContentEntry, FeedBuildError, NamedAuthor, Site, StructuredAuthor,
)
from sitefeed.renderer import BaseRenderer
from sitefeed.utils import absolute_url, collapse_whitespace, iso8601, parse_timestamp, plain_text

logger = logging.getLogger(__name__)


def resolve_author(ref: Optional[AuthorRef], registry: Dict[str, Any]) -> Optional[Dict[str, str]]:
    """Collapse an author reference into ``{name, url?, avatar?}`` or None."""
    if ref is None:
        return None
    if isinstance(ref, StructuredAuthor):
        return _author_dict(ref.name, ref.url, ref.avatar)
    if isinstance(ref, NamedAuthor):
        return _author_dict(ref.name)
    if isinstance(ref, AuthorReference):
        data = registry.get(ref.key)
        if isinstance(data, str):
            return _author_dict(data)
        if not isinstance(data, dict):
            logger.warning(f"[Resolver] Author registry entry {ref.key!r} is malformed; omitting author")
            return None
        name = data.get("name")
        if not isinstance(name, str) or not name.strip():
            logger.warning(f"[Resolver] Author registry entry {ref.key!r} has no name; omitting author")
            return None
        return _author_dict(name, data.get("url"), data.get("avatar"))
    raise TypeError(f"Unknown author reference {ref!r}")


def _author_dict(name: str, url: Any = None, avatar: Any = None) -> Optional[Dict[str, str]]:
    author = {}
    for key, value in (("name", name), ("url", url), ("avatar", avatar)):
        if isinstance(value, str) and value.strip():
            author[key] = value.strip()
    return author if "name" in author else None


def resolve_image(image: Any, site: Site) -> Optional[str]:
    """Absolute image URL from a string or an ``{path|url: ...}`` mapping."""
    if isinstance(image, dict):
        image = image.get("path") or image.get("url")
    if not isinstance(image, str) or not image.strip():
        return None
    return absolute_url(site.url, site.baseurl, image.strip())


class ItemResolver:
    """Builds one JSON Feed item per eligible content entry."""

    def __init__(self, site: Site, renderer: BaseRenderer):
        self.site = site
        self.renderer = renderer
        self.tz = site_timezone(site)

    def resolve(self, entry: ContentEntry) -> Dict[str, Any]:
        if not (entry.url or "").strip():
            raise FeedBuildError(f"Entry {entry.path or entry.title!r} has no URL")
        url = absolute_url(self.site.url, self.site.baseurl, entry.url.strip())
        published = self.published(entry)

        item: Dict[str, Any] = {
            "id": url,
            "url": url,
            "title": collapse_whitespace(entry.title),
            "content_html": self.renderer.render(entry, self.site),
        }
        summary = self._optional("summary", entry, self._summary)
        if summary:
            item["summary"] = summary
        item["date_published"] = iso8601(published)
        modified = self._optional("date_modified", entry, lambda e: self._modified(e, published))
        if modified:
            item["date_modified"] = modified
        author = self._optional("author", entry, lambda e: resolve_author(e.author, self.site.authors))
        if author:
            item["author"] = author
        image = self._optional("image", entry, lambda e: resolve_image(e.image, self.site))
        if image:
            item["image"] = image
        return item

    def published(self, entry: ContentEntry) -> datetime:
        if entry.date is None:
            raise FeedBuildError(f"Entry {entry.path or entry.url} has no publication date")
        try:
            return parse_timestamp(entry.date, self.tz)
        except ValueError as e:
            raise FeedBuildError(f"Entry {entry.path or entry.url} has a malformed date: {e}") from e

    def _summary(self, entry: ContentEntry) -> Optional[str]:
        return plain_text(self.renderer.render_excerpt(entry, self.site)) or None

    def _modified(self, entry: ContentEntry, published: datetime) -> Optional[str]:
        if entry.last_modified_at is None:
            return None
        modified = parse_timestamp(entry.last_modified_at, self.tz)
        if modified == published:
            return None
        return iso8601(modified)

    def _optional(self, field: str, entry: ContentEntry, fn):
        try:
            return fn(entry)
        except Exception as e:
            logger.warning(f"[Resolver] Could not resolve {field} for {entry.path or entry.url}: {e}")
            return None


def resolve_item(entry: ContentEntry, site: Site, renderer: BaseRenderer) -> Dict[str, Any]:
    return ItemResolver(site, renderer).resolve(entry)
