"""Feed build pipeline: select -> resolve -> assemble -> write."""
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, Optional

from sitefeed.formatters import JSONFeedFormatter
from sitefeed.models import ContentEntry, Site
from sitefeed.renderer import BaseRenderer, MarkdownRenderer
from sitefeed.resolver import ItemResolver
from sitefeed.selector import select_entries
from sitefeed.writer import write_feed

logger = logging.getLogger(__name__)


class FeedGenerator:
    """Builds the JSON Feed for one site build."""

    def __init__(self, site: Site, renderer: Optional[BaseRenderer] = None,
                 formatter: Optional[JSONFeedFormatter] = None):
        self.site = site
        self.renderer = renderer or MarkdownRenderer()
        self.formatter = formatter or JSONFeedFormatter()

    def build(self, entries: Iterable[ContentEntry]) -> Dict[str, Any]:
        """Return the feed document (newest items first)."""
        selected = select_entries(entries)
        resolver = ItemResolver(self.site, self.renderer)
        dated = [(resolver.published(e), resolver.resolve(e)) for e in selected]
        # stable: entries with the same date keep enumeration order
        dated.sort(key=lambda pair: pair[0], reverse=True)
        feed = self.formatter.build([item for _, item in dated], self.site)
        logger.info(f"[Generator] Built feed with {len(dated)} items")
        return feed

    def render(self, entries: Iterable[ContentEntry]) -> str:
        return self.formatter.dumps(self.build(entries))

    def generate(self, entries: Iterable[ContentEntry]) -> Path:
        """Build, serialize and write the feed; returns the written path."""
        return write_feed(self.render(entries), self.site)


def generate_feed(site: Site, entries: Iterable[ContentEntry],
                  renderer: Optional[BaseRenderer] = None) -> Path:
    return FeedGenerator(site, renderer=renderer).generate(entries)
