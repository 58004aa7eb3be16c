"""steamauth CLI - Log in and print an auth session ticket."""
import asyncio
import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from ..core.api import AuthConfig, DEFAULT_CONFIG_FILE
from ..core.api.config import parse_app_id
from ..core.api.protocols import SessionTransport
from ..core import AuthOrchestrator, AuthOutcome, TerminationReason
from ..core.exceptions import ConfigurationError
from ..transports import load_transport

app = typer.Typer(
    name="steamauth",
    help="Log in unattended and fetch an auth session ticket",
    add_completion=False
)
console = Console()


def run_async(coro):
    """Run async function."""
    return asyncio.run(coro)


def configure_logging(verbose: bool):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True
    )


def read_line(prompt: str) -> str:
    """Prompts on the console and returns the line as typed."""
    return console.input(prompt)


async def authenticate(config: AuthConfig, transport: SessionTransport) -> AuthOutcome:
    """Builds the orchestrator on the running loop and runs it."""
    orchestrator = AuthOrchestrator(config, transport, reader=read_line)
    return await orchestrator.run()


def report(outcome: AuthOutcome, ticket_file: Optional[Path]):
    if outcome.reason is TerminationReason.TICKET_ISSUED:
        console.print(f"Ticket={outcome.ticket.hex}")
        if ticket_file:
            ticket_file.write_text(outcome.ticket.hex + "\n", encoding="utf-8")
            console.print(f"Ticket written to: {ticket_file}")
    elif outcome.reason is TerminationReason.CHALLENGE_DECLINED:
        console.print("[yellow]Second factor required, interactive input disabled[/yellow]")
    elif outcome.error is not None:
        console.print(f"[red]{escape(str(outcome.error))}[/red]")


@app.command()
def run(
    username: str = typer.Option(None, "--username", help="Account name"),
    password: str = typer.Option(None, "--password", help="Account password"),
    app_id: Optional[str] = typer.Option(None, "--app-id", help="Application id (invalid values become 0)"),
    no_2fa: bool = typer.Option(False, "--no-2fa", help="Exit instead of prompting for a code"),
    config_file: Path = typer.Option(
        Path(DEFAULT_CONFIG_FILE), "--config", "-c", help="KEY=VALUE config file"
    ),
    transport: str = typer.Option(None, "--transport", help="Transport factory as module:callable"),
    sentry_dir: Path = typer.Option(None, "--sentry-dir", help="Directory for sentry files"),
    ticket_file: Path = typer.Option(None, "--ticket-file", "-o", help="Also write the ticket here"),
    strict_exit: bool = typer.Option(False, "--strict-exit", help="Exit 1 when no ticket was issued"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
):
    """Connect, log in and print an auth session ticket."""
    configure_logging(verbose)
    
    try:
        config = AuthConfig.from_file(config_file).merged(
            username=username,
            password=password,
            app_id=parse_app_id(app_id) if app_id is not None else None,
            no_2fa=no_2fa or None,
            transport=transport,
            sentry_dir=sentry_dir,
        ).validate()
        
        if not config.transport:
            raise ConfigurationError("No transport configured (TRANSPORT or --transport)")
        
        outcome = run_async(authenticate(config, load_transport(config.transport)))
        report(outcome, ticket_file)
    except Exception as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        outcome = None
    
    if strict_exit and (outcome is None or outcome.reason.is_error):
        raise typer.Exit(1)


def main():
    app()


if __name__ == "__main__":
    main()
