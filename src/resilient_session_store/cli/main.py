"""CLI entry point for resilient-session-store.

Invoked as::

    resilient-session-store [OPTIONS] COMMAND [ARGS]...

or, during development::

    python -m resilient_session_store.cli.main

Commands
--------
- version  — Show detailed version information
- show     — Decode and display a stored session
- exists   — Report whether a session is stored
- destroy  — Delete a stored session
"""
from __future__ import annotations

import json
import sys
from typing import TYPE_CHECKING, Any

import click
from rich.console import Console
from rich.table import Table

if TYPE_CHECKING:
    from resilient_session_store.session.store import SessionStore

console = Console()

_CODEC_CHOICES = ["native", "json", "migrating", "hybrid", "yaml"]


# ---------------------------------------------------------------------------
# Store factory
# ---------------------------------------------------------------------------


class _FailureLog:
    """Collects hook invocations so commands can report them."""

    def __init__(self) -> None:
        self.backend_errors: list[BaseException] = []
        self.decode_errors: list[BaseException] = []

    def on_backend_down(self, error: BaseException, context: Any, identifier: str | None) -> None:
        self.backend_errors.append(error)

    def on_decode_error(self, error: BaseException, identifier: str) -> None:
        self.decode_errors.append(error)


def _make_store(url: str, key_prefix: str, codec: str, failures: _FailureLog) -> SessionStore:
    """Instantiate a ``SessionStore`` wired to ``failures``."""
    from resilient_session_store.session.store import SessionStore

    return SessionStore(
        redis_url=url,
        key_prefix=key_prefix,
        codec=codec,
        on_backend_down=failures.on_backend_down,
        on_decode_error=failures.on_decode_error,
    )


def _abort_if_down(failures: _FailureLog) -> None:
    if failures.backend_errors:
        console.print(f"[red]Backend unreachable:[/red] {failures.backend_errors[0]}")
        sys.exit(2)


# ---------------------------------------------------------------------------
# Root group
# ---------------------------------------------------------------------------


@click.group()
@click.option(
    "--url",
    default="redis://localhost:6379/0",
    show_default=True,
    envvar="SESSION_STORE_REDIS_URL",
    help="Redis connection URL.",
)
@click.option("--key-prefix", default="", help="Prefix prepended to every session key.")
@click.option(
    "--codec",
    default="native",
    show_default=True,
    type=click.Choice(_CODEC_CHOICES, case_sensitive=False),
    help="Codec the stored sessions were written with.",
)
@click.version_option(package_name="resilient-session-store")
@click.pass_context
def cli(ctx: click.Context, url: str, key_prefix: str, codec: str) -> None:
    """Inspect and manage sessions in a Redis-backed session store."""
    ctx.ensure_object(dict)
    failures = _FailureLog()
    ctx.obj["failures"] = failures
    ctx.obj["store"] = _make_store(url, key_prefix, codec, failures)


# ---------------------------------------------------------------------------
# version
# ---------------------------------------------------------------------------


@cli.command(name="version")
def version_command() -> None:
    """Show detailed version information."""
    from resilient_session_store import __version__

    console.print(f"[bold]resilient-session-store[/bold] v{__version__}")


# ---------------------------------------------------------------------------
# show
# ---------------------------------------------------------------------------


@cli.command(name="show")
@click.argument("identifier")
@click.option("--json-output", is_flag=True, help="Output raw JSON instead of a table.")
@click.pass_context
def show_command(ctx: click.Context, identifier: str, json_output: bool) -> None:
    """Decode and display the session stored under IDENTIFIER."""
    store = ctx.obj["store"]
    failures: _FailureLog = ctx.obj["failures"]

    loaded = store.load(identifier)
    _abort_if_down(failures)
    if failures.decode_errors:
        console.print(
            f"[red]Session {identifier} was undecodable and has been discarded:[/red] "
            f"{failures.decode_errors[0]}"
        )
        sys.exit(1)
    if loaded.identifier != identifier:
        console.print(f"[red]Session not found:[/red] {identifier}")
        sys.exit(1)

    if json_output:
        console.print_json(json.dumps(dict(loaded.record), default=repr))
        return

    table = Table(title=f"Session {identifier[:8]}", show_lines=True)
    table.add_column("Key", style="bold cyan")
    table.add_column("Value")
    for key in sorted(loaded.record):
        table.add_row(str(key), repr(loaded.record[key]))
    console.print(table)


# ---------------------------------------------------------------------------
# exists
# ---------------------------------------------------------------------------


@cli.command(name="exists")
@click.argument("identifier")
@click.pass_context
def exists_command(ctx: click.Context, identifier: str) -> None:
    """Report whether a session is stored under IDENTIFIER.

    Exits 0 when it exists and 1 when it does not.
    """
    store = ctx.obj["store"]
    found = store.exists(identifier)
    _abort_if_down(ctx.obj["failures"])
    if found:
        console.print(f"[green]Session exists:[/green] {identifier}")
        return
    console.print(f"[yellow]No session stored:[/yellow] {identifier}")
    sys.exit(1)


# ---------------------------------------------------------------------------
# destroy
# ---------------------------------------------------------------------------


@cli.command(name="destroy")
@click.argument("identifier")
@click.pass_context
def destroy_command(ctx: click.Context, identifier: str) -> None:
    """Delete the session stored under IDENTIFIER."""
    store = ctx.obj["store"]
    store.destroy(identifier, replace=False)
    _abort_if_down(ctx.obj["failures"])
    console.print(f"[green]Session destroyed:[/green] {identifier}")


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
