"""Shared test fixtures: a small Jekyll-style site on disk."""
import textwrap
from pathlib import Path

import pytest

from sitefeed.generator import FeedGenerator
from sitefeed.loader import load_entries, load_site

SITE_FILES = {
    "_config.yml": """\
        url: http://example.org
        name: My awesome site
        show_drafts: true
        author:
          name: Dr. Jekyll
          url: http://example.org/dr_jekyll
          avatar: http://example.org/dr_jekyll/avatar.png
        """,
    "_data/authors.yml": """\
        garth:
          name: Garth
          url: http://garthdb.com
        broken: 42
        """,
    "_posts/2013-12-12-dec-the-second.md": """\
        ---
        title: Dec The Second
        excerpt: Foo
        ---
        # Dec The Second
        """,
    "_posts/2014-03-02-march-the-second.md": """\
        ---
        title: March The Second
        author:
          name: Ben
          url: http://ben.balter.com
        ---
        March the second!
        """,
    "_posts/2014-03-03-image-object.md": """\
        ---
        title: Image Object
        image:
          path: /object-image.png
        ---
        {{ "Liquid is not rendered." | replace("not ", "") }}
        """,
    "_posts/2014-03-04-march-the-fourth.md": """\
        ---
        title: March The Fourth
        author: Pat
        image: /image.png
        last_modified_at: 2015-05-12T13:27:59+00:00
        ---
        Some code:

        ```
        Line 1
        Line 2
        Line 3
        ```
        """,
    "_posts/2015-08-08-stuck-in-the-middle.html": """\
        ---
        title: |
          The plugin
          will properly strip newlines.
        author: garth
        image: https://cdn.example.org/absolute.png
        excerpt: ""
        ---
        <p>Stuck in the middle.</p>
        """,
    "_posts/2016-02-09-a-draft.md": """\
        ---
        title: A Draft
        draft: true
        ---
        Not ready.
        """,
    "_posts/2016-02-10-unpublished.md": """\
        ---
        title: Unpublished
        published: false
        ---
        Hidden.
        """,
    "_drafts/a-draft-too.md": """\
        ---
        title: Another Draft
        ---
        Work in progress.
        """,
    "about.md": """\
        ---
        title: About
        ---
        About this site.
        """,
    "feeds/atom.xml": """\
        <feed></feed>
        """,
}


def write_site(root: Path, files=None) -> Path:
    for rel, content in (files or SITE_FILES).items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(content), encoding="utf-8")
    (root / "images").mkdir(exist_ok=True)
    (root / "images" / "hubot.png").write_bytes(b"\x89PNG\r\n\x1a\n\x00\x00")
    return root


@pytest.fixture
def site_source(tmp_path):
    return write_site(tmp_path / "src")


@pytest.fixture
def build_site(site_source, tmp_path):
    """Build the fixture site with config overrides; returns (site, feed text)."""
    def _build(overrides=None):
        site = load_site(site_source, destination=tmp_path / "dest", overrides=overrides)
        path = FeedGenerator(site).generate(load_entries(site))
        return site, path.read_text(encoding="utf-8")
    return _build
