"""Interactive chat interface for the Stack-chan dialogue client.

Provides a terminal chat loop on top of one ChatDialogue session. Lines
starting with '/' are slash commands; everything else is posted to the model.
"""

from __future__ import annotations

import asyncio

from rich.console import Console
from rich.markdown import Markdown
from rich.prompt import Prompt

from dialogue.conversation import ChatDialogue
from dialogue.utils.i18n import get_message
from .commands import dispatcher

EXIT_COMMANDS = ('/exit', '/quit')


async def run_chat_interface(dialogue: ChatDialogue, console: Console | None = None) -> None:
    """Run the interactive chat loop until '/exit', '/quit' or end of input.

    Args:
        dialogue: Session whose history accumulates over the chat.
        console: Output console (defaults to a fresh rich Console).
    """
    console = console or Console()
    console.print(f"[bold green]{get_message('chat.banner')}[/bold green]")

    async with dialogue:
        while True:
            try:
                user_input = await asyncio.to_thread(
                    Prompt.ask, f"\n[bold blue]{get_message('chat.you')}[/bold blue]", console=console
                )
            except EOFError:
                break

            if user_input.strip().lower() in EXIT_COMMANDS:
                break
            if not user_input.strip():
                continue

            if user_input.startswith('/'):
                console.print(dispatcher.dispatch(dialogue, user_input.strip()), markup=False)
                continue

            with console.status("..."):
                result = await dialogue.post(user_input)

            if result.success:
                console.print(f"[bold green]{get_message('chat.assistant')}[/bold green]")
                console.print(Markdown(result.value))
            else:
                console.print(
                    get_message('error.post_failed', reason=result.reason, error=result.error),
                    style="bold red",
                    markup=False,
                )
