"""Rich console preview of a built feed."""
import io
from typing import Any, Dict
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table


class ConsoleFormatter:
    def format(self, feed: Dict[str, Any]) -> str:
        console = Console(record=True, width=120, file=io.StringIO())
        items = feed.get("items", [])
        title = escape(feed.get("title", "(untitled)"))
        console.print(Panel(f"[bold cyan]📰 {title}[/] — {len(items)} items\n[dim]{escape(feed.get('feed_url', ''))}[/]", expand=False))

        table = Table(show_lines=False)
        table.add_column("#", justify="right", style="dim")
        table.add_column("Published", style="green", no_wrap=True)
        table.add_column("Title", style="bold white", no_wrap=True)
        table.add_column("Author", no_wrap=True)
        table.add_column("URL", style="blue", overflow="fold")
        for i, item in enumerate(items, 1):
            table.add_row(
                str(i),
                item.get("date_published", "—")[:10],
                escape(item.get("title", "")),
                escape(item.get("author", {}).get("name", "—")),
                item.get("url", ""),
            )
        console.print(table)

        return console.export_text()
