"""Data models for sitefeed."""
from dataclasses import dataclass, field
from datetime import date, datetime
from pathlib import Path
from typing import Any, Dict, Optional, Union


class FeedBuildError(ValueError):
    """An eligible entry cannot be turned into a feed item (fatal for the build)."""


@dataclass(frozen=True)
class StructuredAuthor:
    name: str
    url: Optional[str] = None
    avatar: Optional[str] = None


@dataclass(frozen=True)
class NamedAuthor:
    name: str


@dataclass(frozen=True)
class AuthorReference:
    key: str  # key into the site author registry (_data/authors.yml)


AuthorRef = Union[StructuredAuthor, NamedAuthor, AuthorReference]
Timestamp = Union[datetime, date, str, None]


def author_ref_from_value(value: Any, registry: Optional[Dict[str, Any]] = None) -> Optional[AuthorRef]:
    """Tag a front-matter ``author`` value.

    A mapping is a structured author, a string naming a registry key is a
    reference, any other non-blank string is a plain name.
    """
    if isinstance(value, dict):
        name = str(value.get("name") or "").strip()
        if not name:
            return None
        return StructuredAuthor(
            name=name,
            url=_blank_to_none(value.get("url")),
            avatar=_blank_to_none(value.get("avatar")),
        )
    if isinstance(value, str) and value.strip():
        key = value.strip()
        if registry and key in registry:
            return AuthorReference(key)
        return NamedAuthor(key)
    return None


def _blank_to_none(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


@dataclass
class ContentEntry:
    """One published document (post, page or static file) of the site."""
    url: str
    title: str = ""
    body: str = ""
    date: Timestamp = None
    last_modified_at: Timestamp = None
    excerpt: Optional[str] = None
    image: Union[str, Dict[str, Any], None] = None
    author: Optional[AuthorRef] = None
    draft: bool = False
    published: bool = True
    static: bool = False
    output_ext: str = ".html"
    path: str = ""  # source path, for error messages
    data: Dict[str, Any] = field(default_factory=dict)  # remaining front matter

    @property
    def is_markdown(self) -> bool:
        return Path(self.path).suffix.lower() in (".md", ".markdown", ".mkd")


@dataclass
class Site:
    """Explicit site configuration threaded through every component."""
    url: str = ""
    baseurl: str = ""
    config: Dict[str, Any] = field(default_factory=dict)
    authors: Dict[str, Any] = field(default_factory=dict)
    source: Optional[Path] = None
    destination: Optional[Path] = None

    @classmethod
    def from_config(cls, config: Dict[str, Any], authors: Optional[Dict[str, Any]] = None,
                    source: Optional[Path] = None, destination: Optional[Path] = None) -> "Site":
        return cls(
            url=str(config.get("url") or "").rstrip("/"),
            baseurl=str(config.get("baseurl") or ""),
            config=dict(config),
            authors=authors or {},
            source=source,
            destination=destination,
        )
