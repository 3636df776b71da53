"""Terminal frontend for the conversation store."""

from __future__ import annotations

import argparse
import asyncio
import logging
import pathlib

import httpx
from rich.console import Console
from rich.prompt import Confirm

from qa_client.config import ClientSettings, get_client_settings
from qa_client.models import Message
from qa_client.persistence import JsonFilePersistence
from qa_client.relay_client import RelayClient
from qa_client.render import render
from qa_client.store import ConversationStore

CLEAR_COMMAND = "/clear"
QUIT_COMMANDS = {"/quit", "/exit"}


def print_message(console: Console, message: Message) -> None:
    label = "[bold blue]You:[/bold blue]" if message.sender == "user" else "[bold green]AI:[/bold green]"
    console.print(label)
    console.print(render(message))
    console.print()


async def run_client(settings: ClientSettings, console: Console) -> None:
    """Restore the conversation and keep asking questions until the user quits."""

    persistence = JsonFilePersistence(settings.storage_path)

    async with httpx.AsyncClient() as client:
        store = ConversationStore(
            relay=RelayClient(client, settings),
            persistence=persistence,
            confirm=lambda prompt: Confirm.ask(prompt, console=console, default=False),
        )

        if not store.messages:
            console.print("[dim]Ask me anything. /clear empties the chat, /quit exits.[/dim]")
        for message in store.messages:
            print_message(console, message)

        while True:
            try:
                store.draft = console.input("[bold blue]> [/bold blue]")
            except (KeyboardInterrupt, EOFError):
                console.print()
                break

            command = store.draft.strip()
            if command in QUIT_COMMANDS:
                break
            if command == CLEAR_COMMAND:
                store.draft = ""
                if store.clear():
                    console.print("[dim]Conversation cleared.[/dim]")
                continue

            seen = len(store.messages)
            with console.status("Thinking..."):
                await store.submit(store.draft)
            for message in store.messages[seen:]:
                if message.sender == "ai":
                    print_message(console, message)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Chat with the AI Q&A relay from the terminal.")
    parser.add_argument("--url", help="Relay ask endpoint (default: QA_RELAY_URL or localhost).")
    parser.add_argument("--storage", type=pathlib.Path, help="Conversation state file.")
    parser.add_argument("--log-level", help="Logging level.")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    overrides = {
        name: value
        for name, value in (
            ("relay_url", args.url),
            ("storage_path", args.storage),
            ("log_level", args.log_level and args.log_level.lower()),
        )
        if value
    }
    settings = get_client_settings().model_copy(update=overrides)

    logging.basicConfig(level=getattr(logging, settings.log_level.upper(), logging.WARNING))
    try:
        asyncio.run(run_client(settings, Console()))
    except KeyboardInterrupt:  # pragma: no cover - manual usage only
        pass


if __name__ == "__main__":  # pragma: no cover
    main()
