"""Feed item selection."""
import logging
from typing import Iterable, List

from sitefeed.models import ContentEntry

logger = logging.getLogger(__name__)

HTML_EXTENSIONS = (".html", ".htm")


def is_feed_eligible(entry: ContentEntry) -> bool:
    """HTML output, not a static asset, not a draft, not unpublished."""
    if entry.static or entry.draft or not entry.published:
        return False
    return (entry.output_ext or "").lower() in HTML_EXTENSIONS


def select_entries(entries: Iterable[ContentEntry]) -> List[ContentEntry]:
    """Filter site entries down to those that belong in the feed, keeping order.

    Drafts are always excluded; there is no switch to include them.
    """
    selected = []
    skipped = 0
    for entry in entries:
        if is_feed_eligible(entry):
            selected.append(entry)
        else:
            skipped += 1
    logger.debug(f"[Selector] {len(selected)} entries selected, {skipped} skipped")
    return selected
