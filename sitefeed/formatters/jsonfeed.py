"""JSON Feed 1 output — https://www.jsonfeed.org/version/1/"""
import json
from typing import Any, Dict, List

from sitefeed.config import feed_path, site_title
from sitefeed.models import Site, author_ref_from_value
from sitefeed.resolver import resolve_author
from sitefeed.utils import absolute_url, smartify

JSONFEED_VERSION = "https://jsonfeed.org/version/1"


class JSONFeedFormatter:
    """Assemble resolved items into a JSON Feed document."""

    def __init__(self, indent: int = 2):
        self.indent = indent

    def build(self, items: List[Dict[str, Any]], site: Site) -> Dict[str, Any]:
        feed: Dict[str, Any] = {"version": JSONFEED_VERSION}
        title = site_title(site)
        if title:
            feed["title"] = smartify(title)
        if site.url:
            feed["home_page_url"] = absolute_url(site.url, site.baseurl, "/")
        feed["feed_url"] = absolute_url(site.url, site.baseurl, feed_path(site))
        description = site.config.get("description")
        if isinstance(description, str) and description.strip():
            feed["description"] = smartify(description.strip())
        author = resolve_author(author_ref_from_value(site.config.get("author"), site.authors), site.authors)
        if author:
            feed["author"] = author
        feed["items"] = list(items)
        return feed

    def format(self, items: List[Dict[str, Any]], site: Site) -> str:
        return self.dumps(self.build(items, site))

    def dumps(self, feed: Dict[str, Any]) -> str:
        """Serialize with no trailing whitespace and no blank lines."""
        raw = json.dumps(feed, indent=self.indent, ensure_ascii=False)
        lines = (line.rstrip() for line in raw.split("\n"))
        return "\n".join(line for line in lines if line) + "\n"
