"""Console reporter for terminal output."""

from __future__ import annotations

from itertools import groupby

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from statewalk.core.result import CheckResult
from statewalk.core.walk import Walk


class ConsoleReporter:
    """Formats a CheckResult for terminal output.

    Features:
    - Collapsible repeated edges in walks (e.g., "foo ×3")
    - Trace of the failing walk, step by step
    - Before/after lengths when the failure was shrunk
    """

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def _collapse_walk(self, walk: Walk) -> str:
        """Collapse repeated consecutive edges.

        Example: ['a', 'b', 'b', 'b', 'c'] -> 'a → b ×3 → c'
        """
        if not walk.edges:
            return walk.start

        collapsed = []
        for edge, group in groupby(walk.edges):
            count = len(list(group))
            if count > 1:
                collapsed.append(f"{edge} ×{count}")
            else:
                collapsed.append(edge)

        return f"{walk.start}: " + " → ".join(collapsed)

    def report(self, result: CheckResult) -> None:
        """Output the check result to the console."""
        console = self.console
        console.print()

        if result.success:
            console.print(
                f"  [green]✓[/green] statewalk check: [bold green]PASSED[/bold green] "
                f"[dim]({result.walks_explored} walk(s), {result.steps_taken} step(s), "
                f"{result.duration_ms:.0f}ms)[/dim]"
            )
            console.print()
            return

        failure = result.failure
        assert failure is not None
        console.print("  [red]✗[/red] statewalk check: [bold red]FAILED[/bold red]")
        console.print()

        body = Text()
        body.append("Walk: ", style="cyan")
        body.append(self._collapse_walk(failure.walk))
        body.append("\n")
        if failure.trace:
            body.append("\nTrace:\n", style="cyan")
            for entry in failure.trace:
                body.append(f"  {entry.index:>3}  {entry}\n")
        body.append("\nError: ", style="red")
        body.append(f"{type(failure.root_cause).__name__}: {failure.root_cause}")
        console.print(
            Panel(
                body,
                title=f"[bold]{type(failure.cause).__name__}[/bold] at step {failure.index}",
                border_style="red",
                box=box.ROUNDED,
            )
        )

        table = Table(box=box.SIMPLE, show_header=False)
        table.add_column("Metric", style="dim")
        table.add_column("Value")
        table.add_row("Walks explored", f"{result.walks_explored} / {result.exploration_limit}")
        table.add_row("Steps taken", str(result.steps_taken))
        if result.original_failure is not None and result.original_failure is not failure:
            table.add_row(
                "Shrunk",
                f"{len(result.original_failure.walk)} → {len(failure.walk)} step(s)",
            )
        table.add_row("Duration", f"{result.duration_ms:.0f}ms")
        console.print(table)

    def report_walks(self, walks: list[Walk]) -> None:
        """Output sampled walks as a table."""
        table = Table(title="Sampled walks", box=box.ROUNDED)
        table.add_column("#", justify="right", style="dim")
        table.add_column("Steps", justify="right")
        table.add_column("Walk")
        for i, walk in enumerate(walks, start=1):
            table.add_row(str(i), str(len(walk)), Text(self._collapse_walk(walk)))
        self.console.print(table)
