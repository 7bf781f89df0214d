"""CLI entry point for sitefeed."""
import argparse
import logging
import sys
from pathlib import Path

from sitefeed import __version__
from sitefeed.models import FeedBuildError


def _build_overrides(args) -> dict:
    """Env (SITEFEED_*) then CLI flags; CLI always wins."""
    from sitefeed.config import load_env_config, merge_config, set_dotted

    overrides = {} if args.no_config else load_env_config()
    cli = {}
    if args.url:
        cli["url"] = args.url
    if args.baseurl is not None:
        cli["baseurl"] = args.baseurl
    if args.path:
        set_dotted(cli, "json_feed.path", args.path)
    if args.drafts:
        cli["show_drafts"] = True
    return merge_config(overrides, cli)


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="sitefeed",
        description="📰 sitefeed — JSON Feed generator for static sites",
    )
    parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("source", nargs="?", default=".",
                        help="Site source directory containing _config.yml (default: .)")
    parser.add_argument("-d", "--destination", type=str, default=None,
                        help="Output directory (default: <source>/_site)")
    parser.add_argument("--url", type=str, default=None,
                        help="Override the site url (e.g. https://example.org)")
    parser.add_argument("--baseurl", type=str, default=None,
                        help="Override the site base path (e.g. /blog)")
    parser.add_argument("--path", type=str, default=None,
                        help="Feed path inside the output directory (default: feed.json)")
    parser.add_argument("--drafts", action="store_true",
                        help="Load _drafts (they are still never put in the feed)")
    parser.add_argument("--stdout", action="store_true",
                        help="Print the feed instead of writing it")
    parser.add_argument("--preview", action="store_true",
                        help="Show a table of feed items instead of writing the feed")
    parser.add_argument("--meta", action="store_true",
                        help="Print the <link> discovery tag and exit")
    parser.add_argument("--no-config", action="store_true",
                        help="Ignore SITEFEED_* environment variables")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose logging")
    parser.add_argument("-q", "--quiet", action="store_true", help="Suppress status messages on stderr")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )

    source = Path(args.source)
    if not source.is_dir():
        print(f"Error: source directory not found: {source}", file=sys.stderr)
        sys.exit(1)

    from sitefeed.loader import load_entries, load_site
    destination = Path(args.destination) if args.destination else None
    site = load_site(source, destination=destination, overrides=_build_overrides(args))

    if args.meta:
        from sitefeed.meta import render_meta_tag
        print(render_meta_tag(site))
        return

    if not site.url and not args.quiet:
        print("⚠️  No site url configured; feed URLs will be relative", file=sys.stderr)

    from sitefeed.generator import FeedGenerator
    generator = FeedGenerator(site)
    try:
        entries = load_entries(site)
        if args.preview:
            from sitefeed.formatters import ConsoleFormatter
            print(ConsoleFormatter().format(generator.build(entries)))
            return
        if args.stdout:
            sys.stdout.write(generator.render(entries))
            return
        target = generator.generate(entries)
    except FeedBuildError as e:
        print(f"❌ {e}", file=sys.stderr)
        sys.exit(1)
    except OSError as e:
        print(f"❌ I/O error: {e}", file=sys.stderr)
        sys.exit(1)

    if not args.quiet:
        print(f"✅ Wrote {target}", file=sys.stderr)


if __name__ == "__main__":
    main()
