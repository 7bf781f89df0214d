"""Persist the serialized feed into the site output directory."""
import logging
from pathlib import Path

from sitefeed.config import feed_path
from sitefeed.models import Site

logger = logging.getLogger(__name__)


def write_feed(text: str, site: Site) -> Path:
    """Write (overwrite) the feed file under ``site.destination``.

    Parent directories are created as needed. OS errors propagate.
    """
    if site.destination is None:
        raise ValueError("Site has no destination directory")
    target = Path(site.destination) / feed_path(site)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(text, encoding="utf-8")
    logger.info(f"[Writer] Wrote {len(text.encode('utf-8'))} bytes to {target}")
    return target
