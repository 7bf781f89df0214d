"""Content rendering: template expansion followed by Markdown conversion.

The feed core only needs an object with ``render(entry, site)`` and
``render_excerpt(entry, site)``. ``MarkdownRenderer`` is the default used by
the CLI; a host build pipeline can pass its own renderer instead.
"""
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict

import markdown
from jinja2 import Environment, TemplateError

from sitefeed.models import ContentEntry, Site

logger = logging.getLogger(__name__)

MARKDOWN_EXTENSIONS = ["fenced_code", "tables"]
DEFAULT_EXCERPT_SEPARATOR = "\n\n"


class BaseRenderer(ABC):
    """Turns a content entry into HTML."""

    @abstractmethod
    def render(self, entry: ContentEntry, site: Site) -> str:
        """Fully rendered HTML body."""

    @abstractmethod
    def render_excerpt(self, entry: ContentEntry, site: Site) -> str:
        """Rendered excerpt HTML ('' when the entry has none)."""


class MarkdownRenderer(BaseRenderer):
    """Expands Jinja2 expressions in the entry, then converts Markdown sources to HTML."""

    def __init__(self):
        self.env = Environment(autoescape=False, keep_trailing_newline=True)

    def render(self, entry: ContentEntry, site: Site) -> str:
        return self._convert(entry, site, entry.body)

    def render_excerpt(self, entry: ContentEntry, site: Site) -> str:
        if entry.excerpt is not None:
            text = str(entry.excerpt)
        else:
            separator = site.config.get("excerpt_separator") or DEFAULT_EXCERPT_SEPARATOR
            text = (entry.body or "").strip().split(separator, 1)[0]
        if not text.strip():
            return ""
        return self._convert(entry, site, text)

    def _convert(self, entry: ContentEntry, site: Site, text: str) -> str:
        expanded = self._expand(entry, site, text or "")
        if entry.is_markdown:
            return markdown.markdown(expanded, extensions=MARKDOWN_EXTENSIONS)
        return expanded

    def _expand(self, entry: ContentEntry, site: Site, text: str) -> str:
        if "{{" not in text and "{%" not in text:
            return text
        try:
            return self.env.from_string(text).render(**self._context(entry, site))
        except TemplateError as e:
            logger.warning(f"[Renderer] Template error in {entry.path or entry.url}: {e}; using raw text")
            return text

    @staticmethod
    def _context(entry: ContentEntry, site: Site) -> Dict[str, Any]:
        from sitefeed.meta import render_meta_tag

        site_vars = dict(site.config)
        site_vars.update(url=site.url, baseurl=site.baseurl)
        page_vars = dict(entry.data)
        page_vars.update(title=entry.title, url=entry.url, date=entry.date)
        return {
            "site": site_vars,
            "page": page_vars,
            "json_feed_meta": lambda: render_meta_tag(site),
        }
