"""CLI interface for SmartCalc.

Commands:
- repl: Interactive calculator with history and solver queries
- eval: Feed a key sequence and print the result
- ask: Ask the natural-language solver one question
- keys: Show key bindings
- config: Show effective configuration
"""

import asyncio
import json
import sys
from pathlib import Path

import click
import questionary
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from . import __version__
from .config import load_config
from .keymap import describe_bindings
from .log import setup_logging
from .session import CalculatorSession, UnknownKeyError


console = Console()

REPL_HELP = """[bold]Keys[/bold] are typed as a line, e.g. [cyan]12 + 7 =[/cyan] or [cyan]9 n <Enter>[/cyan]
[bold]?question[/bold]  ask the solver, e.g. [cyan]?square root of 144[/cyan]
[bold]:history[/bold]   show/hide history
[bold]:clear-history[/bold]  clear history
[bold]:keys[/bold]      show key bindings
[bold]:help[/bold]      show this help
[bold]:quit[/bold]      leave"""


def _show_display(session: CalculatorSession):
    """Print the calculator display."""
    display = session.display()

    if session.config.compact_mode:
        pending = f"[dim]{display.pending}[/dim] " if display.pending else ""
        console.print(f"{pending}[bold]{display.current}[/bold]")
        return

    body = Text(justify="right")
    body.append(display.pending or " ", style="dim")
    body.append("\n")
    body.append(display.current, style="bold")
    console.print(Panel(body, title="SmartCalc", width=40))


def _show_history(session: CalculatorSession):
    """Print the history table."""
    if session.history.size == 0:
        console.print("[dim]No calculations yet[/dim]")
        return
    console.print(session.history.to_table())


def _show_keys():
    table = Table(title="Key Bindings")
    table.add_column("Action", style="cyan")
    table.add_column("Keys")

    for label, keys in describe_bindings():
        table.add_row(label, keys)

    console.print(table)


def _solve(session: CalculatorSession, query: str, quiet: bool = False):
    if quiet:
        return asyncio.run(session.ask(query))
    with console.status("[magenta]Solving...[/magenta]"):
        return asyncio.run(session.ask(query))


@click.group()
@click.version_option(version=__version__, prog_name="smartcalc")
@click.option(
    "--path",
    "-p",
    default=".",
    help="Directory holding .smartcalc/config.json (default: current directory)",
)
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
@click.pass_context
def main(ctx, path: str, verbose: bool):
    """SmartCalc - keypad calculator with an AI solver.

    Type keys like a pocket calculator, or ask questions in plain
    words and let a local LLM work out the number.
    """
    project_path = Path(path).resolve()
    if not project_path.exists():
        console.print(f"[red]Error: Path does not exist: {project_path}[/red]")
        sys.exit(1)

    config = load_config(str(project_path))
    setup_logging("DEBUG" if verbose else config.log_level)

    ctx.ensure_object(dict)
    ctx.obj["project_path"] = str(project_path)
    ctx.obj["config"] = config


# --- Calculator Commands ---


@main.command()
@click.pass_context
def repl(ctx):
    """Start an interactive calculator.

    Each line is a sequence of keys. Lines starting with ? go to the
    solver, lines starting with : are shell commands.
    """
    session = CalculatorSession(ctx.obj["config"])

    console.print("[dim]Type :help for help, :quit to leave.[/dim]")
    _show_display(session)

    while True:
        try:
            line = click.prompt("calc", prompt_suffix="> ", default="", show_default=False)
        except click.exceptions.Abort:
            break

        line = line.strip()
        if not line:
            continue

        if line.startswith(":"):
            command = line[1:].strip().lower()
            if command in ("q", "quit", "exit"):
                break
            elif command == "history":
                if session.toggle_history():
                    _show_history(session)
                else:
                    console.print("[dim]History hidden[/dim]")
            elif command == "clear-history":
                session.clear_history()
                console.print("[green]History cleared.[/green]")
            elif command == "keys":
                _show_keys()
            elif command == "help":
                console.print(REPL_HELP)
            else:
                console.print(f"[yellow]Unknown command: {escape(line)}[/yellow]")
            continue

        if line.startswith("?"):
            if not line[1:].strip():
                console.print("[yellow]Ask a question after the ?[/yellow]")
                continue
            _solve(session, line[1:])
        else:
            try:
                session.enter(line)
            except UnknownKeyError as e:
                console.print(f"[yellow]Unknown key: {escape(e.args[0])}[/yellow]")
                continue

        _show_display(session)
        if session.show_history:
            _show_history(session)

    console.print("[dim]Bye.[/dim]")


@main.command("eval")
@click.argument("keys")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def eval_keys(ctx, keys: str, as_json: bool):
    """Press KEYS and print the display.

    Example: smartcalc eval "2 + 3 * 4 ="
    """
    session = CalculatorSession(ctx.obj["config"])

    try:
        session.enter(keys)
    except UnknownKeyError as e:
        console.print(f"[red]Error: Unknown key: {escape(e.args[0])}[/red]")
        sys.exit(1)

    if as_json:
        display = session.display()
        click.echo(json.dumps({
            "state": session.state.to_dict(),
            "display": {"pending": display.pending, "current": display.current},
            "history": [item.to_dict() for item in session.history],
        }, indent=2))
        return

    _show_display(session)
    for item in reversed(session.history.items):
        console.print(f"[dim]{escape(str(item))}[/dim]")


@main.command()
@click.argument("query", required=False)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def ask(ctx, query: str, as_json: bool):
    """Ask the solver a math question in plain words.

    Prompts for the question when QUERY is omitted.
    """
    if not query:
        query = questionary.text("Ask the solver:").ask()
    if not query or not query.strip():
        console.print("[yellow]Aborted.[/yellow]")
        return

    session = CalculatorSession(ctx.obj["config"])
    item = _solve(session, query, quiet=as_json)

    if as_json:
        click.echo(json.dumps(item.to_dict(), indent=2))
        return

    console.print(f"[dim]{escape(item.expression)}[/dim]")
    _show_display(session)


@main.command()
def keys():
    """Show key bindings."""
    _show_keys()


@main.command("config")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def show_config(ctx, as_json: bool):
    """Show the effective configuration."""
    config = ctx.obj["config"]
    data = config.to_dict()

    if as_json:
        click.echo(json.dumps(data, indent=2))
        return

    table = Table(title="SmartCalc Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")

    for section, values in data.items():
        for key, value in values.items():
            table.add_row(f"{section}.{key}", "(unset)" if value is None else str(value))

    console.print(table)
    console.print(f"[dim]Config file: {Path(ctx.obj['project_path']) / '.smartcalc' / 'config.json'}[/dim]")


if __name__ == "__main__":
    main()
