"""Tests for the default content renderer."""
from sitefeed.models import ContentEntry, Site
from sitefeed.renderer import MarkdownRenderer


def _site(**config):
    config.setdefault("url", "http://example.org")
    return Site.from_config(config)


def _md(body, **kwargs):
    return ContentEntry(url="/p.html", title="P", body=body, path="_posts/2014-01-01-p.md", **kwargs)


class TestMarkdownRenderer:
    def test_markdown(self):
        assert MarkdownRenderer().render(_md("March the second!"), _site()) == "<p>March the second!</p>"

    def test_fenced_code_keeps_newlines(self):
        html = MarkdownRenderer().render(_md("```\nLine 1\nLine 2\nLine 3\n```"), _site())
        assert "Line 1\nLine 2\nLine 3" in html
        assert "<pre>" in html

    def test_template_expansion(self):
        entry = _md('{{ "Liquid is not rendered." | replace("not ", "") }}')
        assert MarkdownRenderer().render(entry, _site()) == "<p>Liquid is rendered.</p>"

    def test_site_and_page_context(self):
        entry = _md("{{ page.title }} on {{ site.url }}")
        assert MarkdownRenderer().render(entry, _site()) == "<p>P on http://example.org</p>"

    def test_template_error_falls_back_to_raw(self):
        entry = _md("{% highlight ruby %}x{% endhighlight %}")
        html = MarkdownRenderer().render(entry, _site())
        assert "highlight" in html

    def test_html_source_not_converted(self):
        entry = ContentEntry(url="/p.html", body="*not emphasis*", path="_posts/2014-01-01-p.html")
        assert MarkdownRenderer().render(entry, _site()) == "*not emphasis*"

    def test_feed_meta_available(self):
        entry = _md("{{ json_feed_meta() }}")
        html = MarkdownRenderer().render(entry, _site(name="Site"))
        assert 'href="http://example.org/feed.json"' in html


class TestExcerpt:
    def test_explicit_excerpt(self):
        assert MarkdownRenderer().render_excerpt(_md("Body", excerpt="Foo"), _site()) == "<p>Foo</p>"

    def test_blank_explicit_excerpt(self):
        assert MarkdownRenderer().render_excerpt(_md("Body", excerpt=""), _site()) == ""

    def test_first_paragraph(self):
        entry = _md("First para.\n\nSecond para.")
        assert MarkdownRenderer().render_excerpt(entry, _site()) == "<p>First para.</p>"

    def test_custom_separator(self):
        entry = _md("One\n\nTwo<!--more-->Three")
        html = MarkdownRenderer().render_excerpt(entry, _site(excerpt_separator="<!--more-->"))
        assert "Two" in html
        assert "Three" not in html

    def test_empty_body(self):
        assert MarkdownRenderer().render_excerpt(_md(""), _site()) == ""
