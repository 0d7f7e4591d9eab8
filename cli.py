"""CLI entry point for jira-tempo-proxy."""

import sys
from datetime import datetime

from rich.console import Console

from app import create_app
from core.config import CONFIG_FILE, load_config
from ui.dashboard import Dashboard
from ui.log_utils import CLI_LOG_FILE, LOG_ROOT, clear_logs, write_cli_log

console = Console()


def main():
    """Main CLI entry point."""
    config = load_config()

    # Handle CLI arguments
    if len(sys.argv) > 1:
        arg = sys.argv[1]

        if arg == "--config":
            console.print(f"[bold]Config:[/bold] {CONFIG_FILE}")
            console.print(f"[bold]Request logs:[/bold] {LOG_ROOT}")
            console.print(f"[bold]CLI log:[/bold] {CLI_LOG_FILE}")
            return

        if arg in ("--help", "-h"):
            _print_help()
            return

        console.print(f"[red][ERROR][/red] Unknown argument: {arg}")
        _print_help()
        sys.exit(2)

    # Clear previous logs and start dashboard
    clear_logs()
    dashboard = Dashboard(config)

    import uvicorn

    app = create_app(config, dashboard)

    uvicorn_config = uvicorn.Config(
        app,
        host="127.0.0.1",
        port=config.proxy.port,
        log_level="warning",
    )
    server = uvicorn.Server(uvicorn_config)

    dashboard.start()
    start_time = datetime.now()
    write_cli_log("STARTUP", "Proxy started", port=config.proxy.port)
    try:
        server.run()
    finally:
        duration = datetime.now() - start_time
        write_cli_log("SHUTDOWN", "Proxy stopped", duration=str(duration))
        dashboard.stop()


def _print_help():
    """Print help message."""
    help_text = """
[bold cyan]Jira/Tempo Proxy[/bold cyan]

Forwards UI requests to Jira (cloud or self-hosted) and Tempo with the right auth headers.

[bold]Usage:[/bold]
    jira-tempo-proxy              Start with live dashboard
    jira-tempo-proxy --config     Show config and log locations
    jira-tempo-proxy --help       Show this help

[bold]Endpoints:[/bold]
    POST /api/jira/proxy          Forward a request descriptor
    POST /api/test-connection     Check Jira or Tempo credentials
"""
    console.print(help_text)


if __name__ == "__main__":
    main()
