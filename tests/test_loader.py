"""Tests for the site source loader."""
from datetime import date
from pathlib import Path

from sitefeed.loader import load_entries, load_site, split_front_matter
from sitefeed.models import AuthorReference, NamedAuthor, StructuredAuthor


class TestSplitFrontMatter:
    def test_front_matter(self):
        meta, body = split_front_matter("---\ntitle: Hi\n---\nBody\n")
        assert meta == {"title": "Hi"}
        assert body == "Body\n"

    def test_empty_front_matter(self):
        meta, body = split_front_matter("---\n---\nBody")
        assert meta == {}
        assert body == "Body"

    def test_no_front_matter(self):
        assert split_front_matter("Just text") == (None, "Just text")

    def test_malformed_yaml(self):
        meta, body = split_front_matter("---\ntitle: [oops\n---\nBody")
        assert meta is None


class TestLoadSite:
    def test_config_and_authors(self, site_source):
        site = load_site(site_source)
        assert site.url == "http://example.org"
        assert site.config["name"] == "My awesome site"
        assert "garth" in site.authors
        assert site.destination == site_source / "_site"

    def test_overrides(self, site_source, tmp_path):
        site = load_site(site_source, destination=tmp_path / "out", overrides={"baseurl": "/bass"})
        assert site.baseurl == "/bass"
        assert site.destination == tmp_path / "out"


class TestLoadEntries:
    def _by_title(self, site_source):
        return {e.title: e for e in load_entries(load_site(site_source))}

    def test_posts_newest_first(self, site_source):
        posts = [e for e in load_entries(load_site(site_source)) if Path(e.path).parent.name == "_posts"]
        dates = [e.date for e in posts]
        assert posts[0].title == "Unpublished"
        assert posts[-1].title == "Dec The Second"
        assert dates[-1] == date(2013, 12, 12)

    def test_post_url_from_filename(self, site_source):
        entry = self._by_title(site_source)["March The Fourth"]
        assert entry.url == "/2014/03/04/march-the-fourth.html"
        assert entry.output_ext == ".html"

    def test_author_variants(self, site_source):
        entries = self._by_title(site_source)
        assert entries["March The Second"].author == StructuredAuthor("Ben", "http://ben.balter.com")
        assert entries["March The Fourth"].author == NamedAuthor("Pat")
        assert isinstance(entries["The plugin\nwill properly strip newlines.\n"].author, AuthorReference)

    def test_drafts_loaded_with_show_drafts(self, site_source):
        entries = self._by_title(site_source)
        assert entries["Another Draft"].draft is True
        assert entries["A Draft"].draft is True

    def test_drafts_skipped_without_show_drafts(self, site_source):
        site = load_site(site_source, overrides={"show_drafts": False})
        assert "Another Draft" not in {e.title for e in load_entries(site)}

    def test_unpublished_flag(self, site_source):
        assert self._by_title(site_source)["Unpublished"].published is False

    def test_static_files(self, site_source):
        statics = {e.url for e in load_entries(load_site(site_source)) if e.static}
        assert statics == {"/feeds/atom.xml", "/images/hubot.png"}

    def test_undated_pages_skipped(self, site_source):
        assert "About" not in self._by_title(site_source)

    def test_dated_page_loaded(self, site_source):
        (site_source / "news.md").write_text("---\ntitle: News\ndate: 2014-01-01\n---\nHi\n", encoding="utf-8")
        entry = self._by_title(site_source)["News"]
        assert entry.url == "/news.html"
        assert entry.static is False

    def test_permalink(self, site_source):
        (site_source / "_posts" / "2014-05-05-perma.md").write_text(
            "---\ntitle: Perma\npermalink: /custom/\n---\nx\n", encoding="utf-8")
        assert self._by_title(site_source)["Perma"].url == "/custom/"

    def test_extra_front_matter_in_data(self, site_source):
        (site_source / "_posts" / "2014-05-05-tagged.md").write_text(
            "---\ntitle: Tagged\ntags: [a, b]\n---\nx\n", encoding="utf-8")
        assert self._by_title(site_source)["Tagged"].data == {"tags": ["a", "b"]}

    def test_destination_inside_source_skipped(self, site_source):
        out = site_source / "public"
        out.mkdir()
        (out / "feed.json").write_text("{}", encoding="utf-8")
        site = load_site(site_source, destination=out)
        assert "/public/feed.json" not in {e.url for e in load_entries(site)}

    def test_invalid_post_filename_skipped(self, site_source):
        (site_source / "_posts" / "no-date.md").write_text("---\ntitle: Nope\n---\n", encoding="utf-8")
        assert "Nope" not in self._by_title(site_source)

    def test_invalid_utf8_post_loaded(self, site_source):
        (site_source / "_posts" / "2016-01-01-latin1.md").write_bytes(
            b"---\ntitle: Caf\xe9\n---\nBody\n")
        assert "Caf\ufffd" in self._by_title(site_source)
