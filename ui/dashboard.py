"""Real-time CLI dashboard for proxy monitoring."""

from datetime import datetime
from threading import Lock
from typing import Any
from urllib.parse import urlsplit

from rich.console import Console
from rich.layout import Layout
from rich.live import Live
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.config import Config
from ui.log_utils import write_cli_log, write_request_log

console = Console()


class RequestInfo:
    """Info about a single proxied request."""

    def __init__(self, route: str, method: str, url: str, timestamp: datetime):
        parts = urlsplit(url)
        self.route = route
        self.method = method
        self.host = parts.hostname or "?"
        self.path = parts.path[:60] + "..." if len(parts.path) > 60 else parts.path
        self.timestamp = timestamp


class Dashboard:
    """Real-time dashboard showing recent Jira and Tempo requests."""

    def __init__(self, config: Config):
        self.config = config
        self._lock = Lock()
        self._recent: list[RequestInfo] = []
        self._max_recent = 10
        self._request_count = {"Jira": 0, "Tempo": 0}
        self._errors: list[str] = []
        self._live: Live | None = None

    def start(self) -> "Dashboard":
        """Start the live dashboard."""
        self._live = Live(
            self._build_layout(),
            console=console,
            refresh_per_second=4,
            screen=False,
        )
        self._live.start()
        return self

    def stop(self) -> None:
        """Stop the live dashboard."""
        if self._live:
            self._live.stop()

    def log_request(
        self,
        route: str,
        method: str,
        url: str,
        headers: dict[str, str],
        body: Any = None,
    ) -> None:
        """Log a request about to be sent upstream."""
        with self._lock:
            self._request_count[route] = self._request_count.get(route, 0) + 1
            self._recent.insert(0, RequestInfo(route, method, url, datetime.now()))
            self._recent = self._recent[: self._max_recent]
            self._refresh()

            if self.config.proxy.debug:
                write_request_log(route, method, url, headers, body)
            write_cli_log(route.upper(), f"{method} {url}")

    def log_warning(self, route: str, message: str) -> None:
        """Log a non-fatal oddity in a request."""
        with self._lock:
            write_cli_log("WARNING", message, route=route)

    def log_error(self, route: str, status: int, message: str) -> None:
        """Log an error."""
        with self._lock:
            truncated = message[:50] + "..." if len(message) > 50 else message
            self._errors.insert(0, f"{route} {status}: {truncated}")
            self._errors = self._errors[:3]
            self._refresh()
            write_cli_log("ERROR", message[:200], route=route, status=status)

    def _refresh(self) -> None:
        """Refresh the display."""
        if self._live:
            self._live.update(self._build_layout())

    def _build_layout(self) -> Layout:
        """Build the dashboard layout."""
        layout = Layout()

        layout.split_column(
            Layout(name="header", size=3),
            Layout(name="body"),
            Layout(name="footer", size=5),
        )

        layout["header"].update(self._build_header())
        layout["body"].update(self._build_requests_panel())
        layout["footer"].update(self._build_footer())

        return layout

    def _build_header(self) -> Panel:
        """Build header with stats."""
        stats = Text()
        stats.append("Jira/Tempo Proxy", style="bold cyan")
        stats.append("  |  ")
        stats.append(f"Jira: {self._request_count.get('Jira', 0)}", style="blue")
        stats.append("  |  ")
        stats.append(f"Tempo: {self._request_count.get('Tempo', 0)}", style="magenta")
        stats.append("  |  ")
        stats.append(f"Port: {self.config.proxy.port}", style="dim")

        return Panel(stats, style="cyan")

    def _build_requests_panel(self) -> Panel:
        """Build recent requests panel."""
        if self._recent:
            table = Table(show_header=True, header_style="bold", expand=True, box=None)
            table.add_column("Time", style="dim", width=8)
            table.add_column("Target", width=6)
            table.add_column("Method", width=6)
            table.add_column("Host", ratio=1)
            table.add_column("Path", ratio=2)

            for info in self._recent:
                style = "magenta" if info.route == "Tempo" else "blue"
                table.add_row(
                    info.timestamp.strftime("%H:%M:%S"),
                    Text(info.route, style=style),
                    info.method,
                    info.host,
                    info.path,
                )

            content = table
        else:
            content = Text("Waiting for requests...", style="dim")

        return Panel(content, title="[blue]Recent Requests[/blue]", border_style="blue")

    def _build_footer(self) -> Panel:
        """Build footer with errors and help."""
        if self._errors:
            error_text = Text()
            for err in self._errors:
                error_text.append("! ", style="red bold")
                error_text.append(err + "\n", style="red")
            content = error_text
        else:
            content = Text(
                f"POST requests to http://localhost:{self.config.proxy.port}/api/jira/proxy",
                style="dim",
            )

        return Panel(content, title="[dim]Status[/dim]", border_style="dim")
