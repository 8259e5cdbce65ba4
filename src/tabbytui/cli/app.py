"""Main CLI application using Typer."""
import asyncio

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table

from ..core.client import ServerClient
from ..core.config import Settings, load_settings
from ..core.health import HealthMonitor
from ..logger import setup_logging
from ..state.reducer import health_title

# Load environment variables
load_dotenv()

app = typer.Typer(
    name="tabby-tui",
    help="Terminal chat client for Tabby inference servers",
    no_args_is_help=True,
    add_completion=True,
)

console = Console()


def _resolve_settings(
    url: str | None,
    timeout: float | None,
    health_interval: float | None = None,
    log_level: str | None = None,
    log_file: str | None = None,
) -> Settings:
    """Environment settings with command line overrides applied."""
    env = load_settings()
    return Settings(
        base_url=url or env.base_url,
        timeout=timeout if timeout is not None else env.timeout,
        health_check_interval=(
            health_interval if health_interval is not None else env.health_check_interval
        ),
        log_level=log_level or env.log_level,
        log_file=log_file or env.log_file,
    )


@app.command(name="tui")
def tui_command(
    url: str | None = typer.Option(
        None,
        "--url",
        "-u",
        help="Server base URL (default: $TABBY_URL or http://localhost:8080)"
    ),
    timeout: float | None = typer.Option(
        None,
        "--timeout",
        "-t",
        min=0.1,
        help="Request timeout in seconds"
    ),
    health_interval: float | None = typer.Option(
        None,
        "--health-interval",
        min=0,
        help="Seconds between health checks, 0 checks only at startup"
    ),
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Show log panel with level: debug (all), info, warning, or error"
    ),
    log_file: str | None = typer.Option(
        None,
        "--log-file",
        help="Also write JSON log lines to this file"
    ),
):
    """Launch the interactive chat TUI."""
    from ..ui import run_tui

    settings = _resolve_settings(url, timeout, health_interval, log_level, log_file)
    try:
        asyncio.run(run_tui(
            base_url=settings.base_url,
            timeout=settings.timeout,
            health_check_interval=settings.health_check_interval,
            log_level=settings.log_level,
            log_file=settings.log_file,
        ))
    except KeyboardInterrupt:
        pass
    console.print("[dim]Goodbye![/dim]")


@app.command()
def health(
    url: str | None = typer.Option(
        None,
        "--url",
        "-u",
        help="Server base URL (default: $TABBY_URL or http://localhost:8080)"
    ),
    timeout: float | None = typer.Option(
        None,
        "--timeout",
        "-t",
        min=0.1,
        help="Request timeout in seconds"
    ),
):
    """Query the server health endpoint once and print the result."""
    settings = _resolve_settings(url, timeout)
    setup_logging(settings.log_level, settings.log_file)

    async def _health():
        async with ServerClient(settings.base_url, timeout=settings.timeout) as client:
            return await HealthMonitor(client.stable).fetch_once()

    view = asyncio.run(_health())
    state = view.health_state
    if state is None:
        console.print(f"[red]x[/red] {health_title(view)} at {settings.base_url}")
        raise typer.Exit(code=1)

    console.print(f"[green]+[/green] {health_title(view)}")

    table = Table(show_header=False, box=None)
    table.add_column("Field", style="bold cyan", width=16)
    table.add_column("Value")
    table.add_row("Model", state.model or "-")
    table.add_row("Chat model", state.chat_model or "-")
    table.add_row("Device", state.device)
    table.add_row("Arch", state.arch)
    table.add_row("CPU", f"{state.cpu_info} ({state.cpu_count} cores)")
    table.add_row("CUDA devices", ", ".join(state.cuda_devices) or "None")
    table.add_row("Version", state.version.git_describe)
    table.add_row("Git SHA", state.version.git_sha)
    table.add_row("Built", state.version.build_timestamp or state.version.build_date)
    console.print(table)


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
