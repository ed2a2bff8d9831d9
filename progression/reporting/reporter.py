"""
Progress reporting using Rich library.

Reporters are progress callbacks: attach one to a task or progress
sequence and it renders every notification the task receives.

    with ProgressReporter("Copying files") as reporter:
        for path in reporter.attach(with_progress(files)):
            copy(path)
"""
import time
from typing import Optional, Union

from rich.console import Console
from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TaskID,
    TaskProgressColumn,
    TextColumn,
    TimeElapsedColumn,
    TimeRemainingColumn,
)

from ..core.types import ProgressChangedInfo
from ..logging.setup import console as default_console
from ..progress.task import ProgressTask
from ..sequence.adapter import ProgressIterator

Attachable = Union[ProgressTask, ProgressIterator]


class ProgressReporter:
    """
    Reports progress to the console using Rich.

    Provides:
    - A progress bar for the aggregate progress of the attached task
    - The active task keys as the bar description
    - Time elapsed and remaining
    """

    def __init__(
        self,
        description: str = "Working",
        console: Optional[Console] = None,
        transient: bool = False,
    ):
        """
        Initialize progress reporter.

        Args:
            description: Shown until a task key is reported
            console: Console to draw on (stderr console if None)
            transient: Remove the bar when the reporter stops
        """
        self.description = description
        self.console = console or default_console
        self.transient = transient
        self.progress: Optional[Progress] = None
        self.task_id: Optional[TaskID] = None
        self.start_time = time.time()

    def __enter__(self) -> "ProgressReporter":
        self.progress = Progress(
            SpinnerColumn(),
            TextColumn("[bold blue]{task.description}"),
            BarColumn(bar_width=40),
            TaskProgressColumn(),
            TimeElapsedColumn(),
            TextColumn("ETA:"),
            TimeRemainingColumn(),
            console=self.console,
            transient=self.transient,
        )
        self.progress.start()
        self.task_id = self.progress.add_task(self.description, total=100)
        self.start_time = time.time()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.progress:
            self.progress.stop()

    def __call__(self, info: ProgressChangedInfo):
        """Handle a progress notification."""
        if not self.progress or self.task_id is None:
            return
        self.progress.update(
            self.task_id,
            completed=info.percent,
            description=info.description or self.description,
        )

    def attach(self, target: Attachable, max_depth: Optional[int] = None) -> Attachable:
        """Register this reporter as a callback on a task or progress sequence."""
        target.set_callback(self, max_depth)
        return target

    @property
    def completed(self) -> float:
        """Percentage currently shown on the bar."""
        if not self.progress or self.task_id is None:
            return 0.0
        return self.progress.tasks[0].completed

    def print_summary(self):
        """Print elapsed time."""
        elapsed = time.time() - self.start_time
        minutes = int(elapsed // 60)
        seconds = int(elapsed % 60)
        self.console.print(f"[green]Completed in {minutes}m {seconds}s[/green]")


class SimpleReporter:
    """
    Simple text-based progress reporter for non-interactive output.

    Prints a line only when the whole percentage changes.
    """

    def __init__(self, description: str = "Working", console: Optional[Console] = None):
        self.description = description
        self.console = console or default_console
        self.last_percent = -1

    def __enter__(self) -> "SimpleReporter":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        pass

    def __call__(self, info: ProgressChangedInfo):
        percent = int(info.percent)
        if percent != self.last_percent:
            self.last_percent = percent
            status = info.description or self.description
            self.console.print(f"[{percent:3d}%] {status}", markup=False, highlight=False)

    def attach(self, target: Attachable, max_depth: Optional[int] = None) -> Attachable:
        target.set_callback(self, max_depth)
        return target

    def print_summary(self):
        self.console.print("Completed!", markup=False)


def create_reporter(
    description: str = "Working",
    console: Optional[Console] = None,
    interactive: Optional[bool] = None,
):
    """
    Create appropriate reporter for the console.

    Args:
        interactive: Force a rich progress bar (True) or plain lines (False);
            detected from the console if None
    """
    console = console or default_console
    if interactive is None:
        interactive = console.is_terminal
    if interactive:
        return ProgressReporter(description, console=console)
    return SimpleReporter(description, console=console)
