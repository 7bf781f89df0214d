"""Feed discovery ``<link>`` tag for page templates."""
import html
from typing import Dict, Optional

from markupsafe import Markup

from sitefeed.config import feed_path, site_title
from sitefeed.models import Site
from sitefeed.utils import absolute_url


def meta_attributes(site: Site) -> Dict[str, str]:
    attrs: Dict[str, Optional[str]] = {
        "type": "application/json",
        "rel": "alternate",
        "href": absolute_url(site.url, site.baseurl, feed_path(site)),
        "title": site_title(site),
    }
    return {k: v for k, v in attrs.items() if v}


def _escape_attr(value: str) -> str:
    # Apostrophes stay raw; the value is always double-quoted.
    return html.escape(value, quote=False).replace('"', "&quot;")


def render_meta_tag(site: Site) -> str:
    """``<link type="application/json" rel="alternate" href=... title=... />``"""
    attrs = " ".join(f'{k}="{_escape_attr(v)}"' for k, v in meta_attributes(site).items())
    return f"<link {attrs} />"


def register_jinja(env, site: Site) -> None:
    """Expose ``{{ json_feed_meta() }}`` in a Jinja2 environment."""
    env.globals["json_feed_meta"] = lambda: Markup(render_meta_tag(site))
