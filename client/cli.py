"""Command-line entry points using Typer."""

import asyncio
from typing import Optional

import httpx
import typer
from rich.console import Console

from client.conversation import Conversation
from client.render import ChatView
from config.settings import get_settings


app = typer.Typer(
    name="cybermedassist",
    help="Medical billing and coding chat assistant",
    no_args_is_help=True,
)

console = Console()

EXIT_WORDS = {"exit", "quit", ":q"}


@app.command()
def chat(
    url: Optional[str] = typer.Option(
        None,
        "--url",
        "-u",
        help="Base URL of the chat API (default: CHAT_API_URL)",
    ),
    history_cap: Optional[int] = typer.Option(
        None,
        "--history-cap",
        "-n",
        help="Most recent turns sent with each message (0 sends everything)",
    ),
):
    """Chat with the assistant in the terminal."""
    settings = get_settings()
    base_url = url or settings.chat_api_url
    cap = settings.history_cap if history_cap is None else history_cap

    async def _chat():
        view = ChatView(console)
        # No client-side timeout; the server bounds the upstream call
        async with httpx.AsyncClient(base_url=base_url, timeout=None) as http:
            conversation = Conversation(http, history_cap=cap or None, on_change=view.update)
            view.show_empty_hint()
            while True:
                try:
                    text = console.input("[bold blue]> [/bold blue]")
                except (EOFError, KeyboardInterrupt):
                    break
                if text.strip().lower() in EXIT_WORDS:
                    break
                await conversation.submit(text)

    asyncio.run(_chat())
    console.print("[dim]Goodbye.[/dim]")


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", "--host", help="Bind address"),
    port: int = typer.Option(8000, "--port", "-p", help="Bind port"),
    reload: bool = typer.Option(False, "--reload", help="Reload on code changes"),
):
    """Run the chat API server."""
    import uvicorn

    uvicorn.run("app.main:app", host=host, port=port, reload=reload)


if __name__ == "__main__":
    app()
