"""
Commands for the openjustice CLI: ask, chat, export.
"""

from argparse import ArgumentParser, Namespace
import logging
import mimetypes
from pathlib import Path
from typing import TYPE_CHECKING, ClassVar

from rich.console import Console

from .._resources.documents import default_pdf_name, encode_image_data_url
from ..chat import ChatSession
from .base import Command
from .display import DISPLAYS, MarkdownDisplay
from .util import read_line

if TYPE_CHECKING:
    from ..client import OpenJustice

logger = logging.getLogger(__name__)


def _image_path(value: str | None) -> Path | None:
    if value is None:
        return None
    path = Path(value).expanduser()
    if not path.is_file():
        raise FileNotFoundError(f"Image not found: {path}")
    return path


class AskCommand(Command):
    """Send one message and stream the answer."""

    name = "ask"
    aliases: ClassVar[list[str]] = ["a"]
    description = "Send a message and stream the workflow's answer"

    def add_arguments(self, parser: ArgumentParser) -> None:
        parser.add_argument("message", help="Message to send")
        parser.add_argument("--image", help="Image file to upload and attach")
        parser.add_argument(
            "--resume", metavar="EXECUTION_ID", help="Resume a paused execution"
        )
        parser.add_argument(
            "--output",
            choices=sorted(DISPLAYS),
            default="verbose",
            help="Output format (default: verbose)",
        )
        parser.add_argument(
            "--json",
            action="store_const",
            const="json",
            dest="output",
            help="Same as --output json",
        )

    def execute(self, args: Namespace, client: "OpenJustice") -> int:
        display = DISPLAYS[args.output]()
        image = _image_path(args.image)
        display.start()
        try:
            response = client.process_message(
                args.message, image, display.on_update, args.resume
            )
        except BaseException:
            display.abort()
            raise
        display.finish(response)
        return 0


class ChatCommand(Command):
    """Interactive multi-turn chat."""

    name = "chat"
    aliases: ClassVar[list[str]] = ["c"]
    description = "Chat interactively; paused executions resume automatically"

    def add_arguments(self, parser: ArgumentParser) -> None:
        parser.add_argument("--image", help="Image file to attach to every message")

    def execute(self, args: Namespace, client: "OpenJustice") -> int:
        console = Console()
        session = ChatSession(client)
        image = _image_path(args.image)
        console.print("[dim]Commands: /export [PATH], /reset, /exit[/dim]")

        while True:
            label = "You (reply) › " if session.awaiting_input else "You › "
            line = read_line(label)
            if line is None:
                console.print()
                return 0
            text = line.strip()
            if not text:
                continue
            if text in ("/exit", "/quit"):
                return 0
            if text == "/reset":
                session.reset()
                console.print("[dim]Conversation cleared.[/dim]")
                continue
            if text.startswith("/export"):
                self._export(console, session, text[len("/export") :].strip() or None, image)
                continue

            display = MarkdownDisplay(console=console)
            try:
                response = session.send(text, image, display.on_update)
            except Exception as e:
                display.abort()
                console.print(f"[red]❌ {e}[/red]")
                continue
            display.finish(response)

    @staticmethod
    def _export(
        console: Console, session: ChatSession, path: str | None, image: Path | None
    ) -> None:
        try:
            image_bytes = image.read_bytes() if image else None
            mime_type = (mimetypes.guess_type(image.name)[0] if image else None) or "image/png"
            target = session.export_pdf(path, image=image_bytes, image_mime_type=mime_type)
        except Exception as e:
            console.print(f"[red]❌ {e}[/red]")
            return
        console.print(f"[green]Saved {target}[/green]")


class ExportCommand(Command):
    """Render text as a signed PDF via the document service."""

    name = "export"
    aliases: ClassVar[list[str]] = ["pdf"]
    description = "Generate a signed PDF from answer text"

    def add_arguments(self, parser: ArgumentParser) -> None:
        source = parser.add_mutually_exclusive_group(required=True)
        source.add_argument("--message", help="Answer text to render")
        source.add_argument("--from-file", help="Read the answer text from a file")
        parser.add_argument("--image", help="Image to embed in the document")
        parser.add_argument("-o", "--output", help="Output path (default: dated file name)")

    def execute(self, args: Namespace, client: "OpenJustice") -> int:
        message = args.message
        if args.from_file:
            message = Path(args.from_file).read_text(encoding="utf-8")
        if not message or not message.strip():
            print("❌ No message content available to download")
            return 1

        image_data = None
        image = _image_path(args.image)
        if image is not None:
            mime_type = mimetypes.guess_type(image.name)[0] or "image/png"
            image_data = encode_image_data_url(image.read_bytes(), mime_type)

        target = Path(args.output) if args.output else Path(default_pdf_name())
        pdf = client.documents.generate_pdf(message, image_data=image_data, file_name=target.name)
        target.write_bytes(pdf)
        print(f"✅ Saved {target} ({len(pdf):,} bytes)")
        return 0


COMMANDS: list[type[Command]] = [AskCommand, ChatCommand, ExportCommand]

