"""Slash-command and Typer CLI handlers for the Stack-chan dialogue client.

Defines the Typer commands (``ask``, ``chat``, ``context``), the shared
``--log-level`` / ``--locale`` options and the in-chat slash-command dispatcher.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, Dict, List, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from dialogue.config import settings
from dialogue.conversation import ChatDialogue
from dialogue.utils.component_registry import register
from dialogue.utils.exceptions import ConfigurationError
from dialogue.utils.i18n import get_message, i18n_manager
from dialogue.utils.logging import configure_logging


# --------------------------------------------------------------------------- #
# Minimal in-memory dispatcher for slash-commands (when running the chat)     #
# --------------------------------------------------------------------------- #
class CommandDispatcher:
    """In-memory dispatcher for slash-commands in the interactive chat.

    Handlers receive the live session and the text after the command name.
    """
    def __init__(self):
        self._cmds: Dict[str, Callable[[ChatDialogue, str], str]] = {}

    def register(self, name: str):
        """Register a function as a slash-command."""

        def wrapper(fn):
            register("command", name)(fn)
            self._cmds[name] = fn
            return fn

        return wrapper

    def dispatch(self, dialogue: ChatDialogue, line: str) -> str | None:
        """Dispatch a line to the appropriate slash-command handler.

        Args:
            dialogue: Session the command acts on.
            line: Input line starting with '/'.

        Returns:
            str | None: Command result or None if not a command.
        """
        if not line.startswith("/"):
            return None
        name, _, payload = line[1:].partition(" ")
        if name in self._cmds:
            return self._cmds[name](dialogue, payload)
        return get_message("command.unknown", command=name)

    @property
    def names(self) -> List[str]:
        return sorted(self._cmds)


dispatcher = CommandDispatcher()


def format_messages(messages: List[Dict[str, str]]) -> str:
    """Render messages one per line as ``role: content``."""
    return "\n".join(f"{m['role']}: {m['content']}" for m in messages)


@dispatcher.register("clear")
def _clear(dialogue: ChatDialogue, _: str) -> str:
    dialogue.clear()
    return get_message("chat.cleared")


@dispatcher.register("history")
def _history(dialogue: ChatDialogue, _: str) -> str:
    history = dialogue.history
    if not history:
        return get_message("chat.history_empty")
    return format_messages(history)


@dispatcher.register("context")
def _context(dialogue: ChatDialogue, _: str) -> str:
    return format_messages(dialogue.context)


@dispatcher.register("help")
def _help(dialogue: ChatDialogue, _: str) -> str:
    return get_message("chat.help")


# --------------------------------------------------------------------------- #
# Session construction                                                        #
# --------------------------------------------------------------------------- #
def build_dialogue(
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        locale: Optional[str] = None,
) -> ChatDialogue:
    """Create a session from CLI options, falling back to settings."""
    context = settings.default_context(locale) if locale else None
    return ChatDialogue(
        api_key or settings.openai_api_key,
        context,
        model=model,
    )


def _dialogue_or_exit(ctx: typer.Context, api_key: Optional[str], model: Optional[str]) -> ChatDialogue:
    try:
        return build_dialogue(api_key, model, (ctx.obj or {}).get("locale"))
    except ConfigurationError:
        typer.echo(get_message("error.missing_api_key"), err=True)
        raise typer.Exit(code=2)


# --------------------------------------------------------------------------- #
# Typer app - entry-point is exposed in pyproject.toml as "stackchan-dialogue" #
# --------------------------------------------------------------------------- #
app = typer.Typer(help=get_message("help.cli"))


@app.callback()
def _root_options(
    ctx: typer.Context,
    log_level: str = typer.Option(
        settings.log_level,
        "--log-level",
        help=get_message("help.log_level"),
        show_default=True,
        case_sensitive=False,
    ),
    locale: Optional[str] = typer.Option(
        None,
        "--locale",
        help=get_message("help.locale"),
    ),
    log_dir: Optional[str] = typer.Option(
        None,
        "--log-dir",
        help=get_message("help.log_dir"),
    ),
):
    """Shared option processed before any sub-command executes."""
    configure_logging(
        level=getattr(logging, log_level.upper(), logging.WARNING),
        log_to_file=log_dir is not None,
        log_dir=log_dir or "logs",
        handler=RichHandler(console=Console(stderr=True), show_time=True, show_level=True, show_path=False),
    )
    if locale:
        i18n_manager.set_language(locale)
    ctx.obj = {"locale": locale}


@app.command("ask", help=get_message("help.ask"))
def ask_command(
    ctx: typer.Context,
    message: str = typer.Argument(..., help=get_message("param.message")),
    api_key: Optional[str] = typer.Option(None, "--api-key", help=get_message("param.api_key")),
    model: Optional[str] = typer.Option(None, "--model", help=get_message("param.model")),
):
    dialogue = _dialogue_or_exit(ctx, api_key, model)

    async def _ask():
        async with dialogue:
            return await dialogue.post(message)

    result = asyncio.run(_ask())
    if not result.success:
        typer.echo(get_message("error.post_failed", reason=result.reason, error=result.error), err=True)
        raise typer.Exit(code=1)
    typer.echo(result.value)


@app.command("chat", help=get_message("help.chat"))
def chat_command(
    ctx: typer.Context,
    api_key: Optional[str] = typer.Option(None, "--api-key", help=get_message("param.api_key")),
    model: Optional[str] = typer.Option(None, "--model", help=get_message("param.model")),
):
    from cli.chat_cli_interface import run_chat_interface

    dialogue = _dialogue_or_exit(ctx, api_key, model)
    asyncio.run(run_chat_interface(dialogue))


@app.command("context", help=get_message("help.context"))
def context_command(ctx: typer.Context):
    locale = (ctx.obj or {}).get("locale")
    typer.echo(format_messages(settings.default_context(locale)))
