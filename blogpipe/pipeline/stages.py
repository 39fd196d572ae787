"""Pipeline stage bookkeeping and run summaries."""

import time
from typing import Callable, Dict, List, Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

console = Console()


class PipelineStage:
    """Represents a pipeline stage."""

    def __init__(self, name: str, description: str):
        self.name = name
        self.description = description
        self.start_time: Optional[float] = None
        self.end_time: Optional[float] = None
        self.success = False
        self.error: Optional[str] = None
        self.stats: Dict = {}

    def start(self):
        """Mark stage as started."""
        self.start_time = time.time()

    def complete(self, stats: Optional[Dict] = None):
        """Mark stage as completed successfully."""
        self.end_time = time.time()
        self.success = True
        if stats:
            self.stats.update(stats)

    def fail(self, error: str):
        """Mark stage as failed."""
        self.end_time = time.time()
        self.success = False
        self.error = error

    @property
    def duration(self) -> float:
        """Get stage duration in seconds."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0


def stage_stats(stages: List[PipelineStage]) -> Dict:
    """Stage results in the shape stored on the run record."""
    return {
        stage.name: {
            "success": stage.success,
            "duration": round(stage.duration, 2),
            "error": stage.error,
            "stats": stage.stats,
        }
        for stage in stages
    }


def print_summary(
    title: str,
    stages: List[PipelineStage],
    total_duration: float,
    describe: Callable[[PipelineStage], str],
) -> None:
    """Print a stage table followed by a success or failure panel."""
    table = Table(title=title)
    table.add_column("Stage", style="cyan")
    table.add_column("Status", style="bold")
    table.add_column("Duration", style="yellow")
    table.add_column("Details", style="dim")

    for stage in stages:
        if stage.success:
            status = "[green]✓[/green]"
            details = describe(stage)
        elif stage.start_time is None:
            status = "[dim]-[/dim]"
            details = "Not run"
        else:
            status = "[red]✗[/red]"
            details = stage.error or "Failed"
        duration = f"{stage.duration:.1f}s" if stage.duration > 0 else "-"

        table.add_row(stage.name.title(), status, duration, details)

    console.print("\n")
    console.print(table)

    if all(stage.success for stage in stages):
        console.print(Panel(
            f"[green]✅ {title} completed[/green]\nDuration: {total_duration:.1f} seconds",
            style="green",
        ))
    else:
        failed = [s.name for s in stages if s.start_time is not None and not s.success]
        console.print(Panel(
            f"[red]❌ {title} failed[/red]\n\n"
            f"Failed stages: {', '.join(failed) or 'none'}\n"
            f"Duration: {total_duration:.1f} seconds",
            style="red",
        ))
