"""Site configuration support for sitefeed.

Loads the site configuration from ``_config.yml`` in the site source
directory, then applies ``SITEFEED_*`` environment overrides.

Example config file:

    # _config.yml
    url: https://example.org
    baseurl: /blog
    title: Pat's Site
    timezone: Europe/Berlin
    json_feed:
      path: feeds/feed.json

Feed path and site title are resolved here so the feed assembler and the
meta link tag always agree.
"""
import logging
import os
from datetime import tzinfo
from pathlib import Path, PurePosixPath
from typing import Any, Dict, Optional

import yaml
from dateutil import tz

from sitefeed.models import Site

logger = logging.getLogger(__name__)

DEFAULT_FEED_PATH = "feed.json"
CONFIG_FILES = ("_config.yml", "_config.yaml")
AUTHORS_FILES = ("_data/authors.yml", "_data/authors.yaml")

# SITEFEED_<NAME> -> dotted config key
_ENV_KEYS = {
    "URL": "url",
    "BASEURL": "baseurl",
    "TITLE": "title",
    "NAME": "name",
    "FEED_PATH": "json_feed.path",
}


def _read_yaml_mapping(path: Path) -> Optional[Dict[str, Any]]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        logger.warning(f"[Config] Failed to load {path}: {e}")
        return None
    if not isinstance(data, dict):
        logger.warning(f"[Config] Ignoring {path}: top level is not a mapping")
        return None
    return data


def load_config(source: Path) -> Dict[str, Any]:
    """Load the site config file from a source directory ({} when absent or broken)."""
    for name in CONFIG_FILES:
        p = Path(source) / name
        if p.is_file():
            data = _read_yaml_mapping(p)
            if data is not None:
                logger.debug(f"[Config] Loaded {p}")
                return data
    return {}


def load_env_config() -> Dict[str, Any]:
    """Load overrides from SITEFEED_* environment variables.

    Maps SITEFEED_URL=https://x.org -> url, SITEFEED_FEED_PATH=atom.json -> json_feed.path, etc.
    """
    config: Dict[str, Any] = {}
    for suffix, key in _ENV_KEYS.items():
        value = os.environ.get(f"SITEFEED_{suffix}")
        if value:
            set_dotted(config, key, value)
    return config


def set_dotted(config: Dict[str, Any], key: str, value: Any) -> None:
    """Set ``a.b`` style keys in a nested mapping."""
    parts = key.split(".")
    node = config
    for part in parts[:-1]:
        child = node.get(part)
        if not isinstance(child, dict):
            child = {}
            node[part] = child
        node = child
    node[parts[-1]] = value


def merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """Deep-merge ``overrides`` onto ``base`` (returns a new dict)."""
    merged = dict(base)
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_config(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_author_registry(source: Path) -> Dict[str, Any]:
    """Load the site-wide author registry from _data/authors.yml."""
    for name in AUTHORS_FILES:
        p = Path(source) / name
        if p.is_file():
            data = _read_yaml_mapping(p)
            if data is not None:
                logger.debug(f"[Config] Loaded {len(data)} authors from {p}")
                return data
    return {}


def feed_path(site: Site) -> str:
    """Configured feed path (``json_feed.path``), falling back to feed.json.

    The path must be a non-blank relative path that stays inside the output
    directory; anything else is logged and replaced by the default.
    """
    section = site.config.get("json_feed")
    if not section:
        return DEFAULT_FEED_PATH
    if not isinstance(section, dict):
        logger.warning(f"[Config] json_feed must be a mapping, got {section!r}; using {DEFAULT_FEED_PATH}")
        return DEFAULT_FEED_PATH
    value = section.get("path")
    if value is None:
        return DEFAULT_FEED_PATH
    if not isinstance(value, str) or not value.strip():
        logger.warning(f"[Config] Invalid json_feed.path {value!r}; using {DEFAULT_FEED_PATH}")
        return DEFAULT_FEED_PATH
    path = PurePosixPath(value.strip().lstrip("/"))
    if not path.parts or ".." in path.parts:
        logger.warning(f"[Config] json_feed.path {value!r} escapes the site; using {DEFAULT_FEED_PATH}")
        return DEFAULT_FEED_PATH
    return str(path)


def site_title(site: Site) -> Optional[str]:
    """Site ``title``, else ``name``, else None."""
    for key in ("title", "name"):
        value = site.config.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return None


def site_timezone(site: Site) -> tzinfo:
    """Timezone for naive timestamps (``timezone`` config, default UTC)."""
    name = site.config.get("timezone")
    if not name:
        return tz.UTC
    zone = tz.gettz(str(name))
    if zone is None:
        logger.warning(f"[Config] Unknown timezone {name!r}; using UTC")
        return tz.UTC
    return zone
