"""
Command-line interface for the post wizard.

Provides an interactive console conversation plus commands to inspect,
export and clear stored posts.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import click
import yaml
from rich.console import Console
from rich.markdown import Markdown
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table

from . import __version__
from .bot import PostBot
from .config import AppSettings, ConfigError, SettingsLoader, StorageBackend
from .storage import StorageError
from .turn import TurnContext
from .wizard import DialogError, DialogStatus

console = Console()


def _conversation_id(user_id: str) -> str:
    return f"cli-{user_id}"


def _print_responses(turn: TurnContext) -> None:
    """Render the bot's outbound messages."""
    for message in turn.responses:
        console.print(Markdown(message))
        console.print()


def _fail(message: str) -> None:
    console.print(f"[red]{escape(message)}[/red]")
    sys.exit(1)


# ============================================================
# Main CLI Group
# ============================================================

@click.group()
@click.version_option(version=__version__, prog_name="fyipost")
@click.option("--config", "-c", type=click.Path(), default=None, help="YAML settings file")
@click.option("--state-dir", type=click.Path(file_okay=False), default=None, help="Directory for state files")
@click.option(
    "--storage",
    type=click.Choice([backend.value for backend in StorageBackend]),
    default=None,
    help="State backend",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx, config: Optional[str], state_dir: Optional[str], storage: Optional[str], verbose: bool):
    """
    FYI Post Wizard

    Collect a source recommendation step by step and store it per user.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ctx.ensure_object(dict)

    try:
        settings = SettingsLoader(config).load()
    except ConfigError as e:
        _fail(f"Configuration error: {e}")

    updates = {}
    if state_dir:
        updates["state_dir"] = Path(state_dir)
    if storage:
        updates["storage"] = StorageBackend(storage)
    if updates:
        settings = settings.model_copy(update=updates)

    ctx.obj["settings"] = settings


def _make_bot(ctx) -> PostBot:
    settings: AppSettings = ctx.obj["settings"]
    try:
        return PostBot.from_settings(settings)
    except OSError as e:
        _fail(f"Cannot open state directory {settings.state_dir}: {e}")


def _user(ctx, user: Optional[str]) -> str:
    return user or ctx.obj["settings"].default_user


# ============================================================
# CHAT Command
# ============================================================

@cli.command()
@click.option("--user", "-u", type=str, default=None, help="User id (defaults to settings)")
@click.option("--fresh", is_flag=True, help="Abandon an unfinished run and start over")
@click.pass_context
def chat(ctx, user: Optional[str], fresh: bool):
    """Start (or continue) the post wizard in the console."""
    user_id = _user(ctx, user)
    conversation_id = _conversation_id(user_id)
    bot = _make_bot(ctx)

    console.print(Panel.fit(bot.welcome(), title="FYI Post", border_style="blue"))
    console.print()

    try:
        turn = TurnContext(user_id=user_id, conversation_id=conversation_id)
        if fresh and bot.dialog.cancel(turn):
            bot.conversation_state.save_changes(turn)
            turn = TurnContext(user_id=user_id, conversation_id=conversation_id)

        # Continue an unfinished run, otherwise begin a new one
        if not bot.dialog.reprompt(turn):
            bot.on_turn(turn)
        _print_responses(turn)

        while True:
            try:
                text = Prompt.ask("[bold cyan]Du[/bold cyan]", console=console)
            except (EOFError, KeyboardInterrupt):
                console.print("\n[yellow]Unterbrochen. 'fyipost chat' setzt den Dialog fort.[/yellow]")
                return

            turn = TurnContext(user_id=user_id, conversation_id=conversation_id, text=text)
            status = bot.on_turn(turn)
            _print_responses(turn)

            if status in (DialogStatus.COMPLETE, DialogStatus.CANCELLED):
                break
    except (StorageError, DialogError) as e:
        _fail(str(e))


# ============================================================
# SHOW / EXPORT / CLEAR Commands
# ============================================================

@cli.command()
@click.option("--user", "-u", type=str, default=None, help="User id (defaults to settings)")
@click.pass_context
def show(ctx, user: Optional[str]):
    """Show the stored post of a user."""
    user_id = _user(ctx, user)
    try:
        post = _make_bot(ctx).get_post(user_id)
    except StorageError as e:
        _fail(str(e))

    if post is None:
        _fail(f"No stored post for user '{user_id}'.")

    table = Table(title=f"Stored post: {user_id}", show_header=True, header_style="bold cyan")
    table.add_column("Field", style="dim")
    table.add_column("Value")
    table.add_row("Typ", post.source_type or "")
    table.add_row("URL", post.url or "")
    table.add_row("Beschreibung", post.description or "")
    table.add_row("Priorität", post.priority or "")
    console.print(table)


@cli.command()
@click.option("--user", "-u", type=str, default=None, help="User id (defaults to settings)")
@click.option("--output", "-o", type=click.Path(dir_okay=False), required=True, help="Output YAML file")
@click.pass_context
def export(ctx, user: Optional[str], output: str):
    """Export the stored post of a user as YAML."""
    user_id = _user(ctx, user)
    try:
        post = _make_bot(ctx).get_post(user_id)
    except StorageError as e:
        _fail(str(e))

    if post is None:
        _fail(f"No stored post for user '{user_id}'.")

    output_path = Path(output)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w") as f:
        yaml.dump(post.model_dump(), f, default_flow_style=False, sort_keys=False, allow_unicode=True)

    console.print(f"[green]Exported to {output_path}[/green]")


@cli.command()
@click.option("--user", "-u", type=str, default=None, help="User id (defaults to settings)")
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def clear(ctx, user: Optional[str], yes: bool):
    """Delete the stored post and any unfinished run of a user."""
    user_id = _user(ctx, user)
    if not yes and not click.confirm(f"Delete all state for user '{user_id}'?"):
        console.print("[red]Aborted.[/red]")
        return

    try:
        _make_bot(ctx).reset(user_id, _conversation_id(user_id))
    except StorageError as e:
        _fail(str(e))

    console.print(f"[green]State for '{user_id}' deleted.[/green]")


@cli.command("init-config")
@click.option("--output", "-o", type=click.Path(dir_okay=False), default="./fyipost.yaml", help="Output YAML file")
@click.pass_context
def init_config(ctx, output: str):
    """Write the effective settings to a YAML file."""
    SettingsLoader().save(output, settings=ctx.obj["settings"])
    console.print(f"[green]Settings written to {output}[/green]")


# ============================================================
# Entry Point
# ============================================================

if __name__ == "__main__":
    cli()
