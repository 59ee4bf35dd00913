"""
CLI display components for streaming answers.

- VerboseDisplay: spinner with the workflow status, answer text as it grows
- CompactDisplay: answer text only
- JsonDisplay: final response as JSON for scripting
"""

from abc import ABC, abstractmethod
import json

from rich.console import Console
from rich.markdown import Markdown
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TaskID, TextColumn

from ..status import StatusRecord
from ..streaming import ResponseAccumulator


def format_status(status: StatusRecord) -> str:
    """``TYPE: Title (status)`` for display."""
    label = f"{status.type}: {status.title}"
    return f"{label} ({status.status})" if status.status else label


class StreamDisplay(ABC):
    """Base class for stream display renderers."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()
        self.printed_chars = 0

    def start(self) -> None:
        """Called before the request is sent."""

    @abstractmethod
    def on_update(self, content: str, status: StatusRecord | None) -> None:
        """Progress callback passed to process_message."""

    @abstractmethod
    def finish(self, response: ResponseAccumulator) -> None:
        """Called once with the finished response."""

    def abort(self) -> None:
        """Called when the call fails; discards any in-flight UI."""

    def _new_text(self, content: str) -> str:
        """Portion of ``content`` not yet printed. Content only ever grows."""
        segment = content[self.printed_chars :]
        self.printed_chars = len(content)
        return segment


class CompactDisplay(StreamDisplay):
    """Print answer text as it arrives, nothing else."""

    def on_update(self, content: str, status: StatusRecord | None) -> None:
        segment = self._new_text(content)
        if segment:
            print(segment, end="", flush=True)

    def finish(self, response: ResponseAccumulator) -> None:
        if self.printed_chars and not response.output_text.endswith("\n"):
            print()


class VerboseDisplay(StreamDisplay):
    """Spinner for workflow status, streamed text, and a rendered answer at the end."""

    def __init__(self, console: Console | None = None) -> None:
        super().__init__(console=console)
        self.progress: Progress | None = None
        self.task_id: TaskID | None = None

    def _show_status(self, status: StatusRecord) -> None:
        description = f"[cyan]{format_status(status)}[/cyan]"
        if self.progress is not None and self.task_id is not None:
            self.progress.update(self.task_id, description=description)
            return
        self.progress = Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=self.console,
            transient=True,
        )
        self.progress.start()
        self.task_id = self.progress.add_task(description, total=None)

    def _stop_progress(self) -> None:
        if self.progress is not None:
            self.progress.stop()
        self.progress = None
        self.task_id = None

    def on_update(self, content: str, status: StatusRecord | None) -> None:
        segment = self._new_text(content)
        if segment:
            self._stop_progress()
            self.console.print(segment, end="", style="white", markup=False, highlight=False)
        if status is not None:
            self._show_status(status)
        elif not segment:
            self._stop_progress()

    def finish(self, response: ResponseAccumulator) -> None:
        self._stop_progress()
        if self.printed_chars and not response.output_text.endswith("\n"):
            self.console.print()
        if not response.output_text.strip():
            self.console.print("[yellow]No answer content was returned.[/yellow]")
        if response.awaiting_input:
            self.console.print(
                Panel(
                    f"Reply with: [bold]openjustice ask --resume {response.execution_id} "
                    '"..."[/bold]',
                    title="[yellow]⏸ Awaiting your input[/yellow]",
                    border_style="yellow",
                )
            )

    def abort(self) -> None:
        self._stop_progress()


class MarkdownDisplay(VerboseDisplay):
    """Like VerboseDisplay, but renders the final answer once as markdown."""

    def on_update(self, content: str, status: StatusRecord | None) -> None:
        if status is not None:
            self._show_status(status)
        else:
            self._stop_progress()

    def finish(self, response: ResponseAccumulator) -> None:
        self._stop_progress()
        if response.output_text.strip():
            self.console.print(Markdown(response.output_text))
        self.printed_chars = 0
        super().finish(response)


class JsonDisplay(StreamDisplay):
    """Print the final response as JSON."""

    def on_update(self, content: str, status: StatusRecord | None) -> None:
        pass

    def finish(self, response: ResponseAccumulator) -> None:
        print(json.dumps(response.to_dict(), indent=2, ensure_ascii=False))


DISPLAYS: dict[str, type[StreamDisplay]] = {
    "verbose": VerboseDisplay,
    "markdown": MarkdownDisplay,
    "compact": CompactDisplay,
    "json": JsonDisplay,
}
