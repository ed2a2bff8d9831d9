"""Tests for console reporters."""

from __future__ import annotations

import io

import pytest
from rich.console import Console

from progression.core.types import ProgressChangedInfo
from progression.progress.stack import ProgressStack
from progression.reporting import ProgressReporter, SimpleReporter, create_reporter
from progression.sequence import with_progress


@pytest.fixture
def console() -> Console:
    return Console(file=io.StringIO(), force_terminal=False, width=100)


def test_rich_reporter_tracks_percent(stack: ProgressStack, console: Console) -> None:
    with ProgressReporter("Copying", console=console) as reporter:
        task = reporter.attach(stack.begin_fixed_task(4))
        task.advance_step()
        assert reporter.completed == 25.0
        task.advance_step()
        assert reporter.completed == 50.0
        task.end()
        assert reporter.completed == 100.0


def test_rich_reporter_uses_task_keys(stack: ProgressStack, console: Console) -> None:
    with ProgressReporter("Working", console=console) as reporter:
        root = reporter.attach(stack.begin_fixed_task(2)).set_task_key("Backup")
        child = stack.begin_fixed_task(2).set_task_key("Copying")
        child.advance_step()
        assert reporter.progress.tasks[0].description == "Backup > Copying"
        assert reporter.completed == 25.0
        child.end()
        root.end()


def test_rich_reporter_ignores_updates_when_stopped(console: Console) -> None:
    reporter = ProgressReporter(console=console)
    reporter(ProgressChangedInfo(progress=0.5))
    assert reporter.completed == 0.0


def test_reporter_attaches_to_sequence(stack: ProgressStack, console: Console) -> None:
    with ProgressReporter(console=console) as reporter:
        for _ in reporter.attach(with_progress([1, 2, 3, 4], stack=stack)):
            pass
        assert reporter.completed == 100.0


def test_simple_reporter_prints_changes(stack: ProgressStack, console: Console) -> None:
    reporter = SimpleReporter("Copying", console=console)
    with reporter:
        task = reporter.attach(stack.begin_fixed_task(2))
        task.advance_step()
        task.advance_step()
        task.end()

    output = console.file.getvalue()
    assert "[ 50%] Copying" in output
    assert "[100%] Copying" in output
    assert output.count("[100%]") == 1


def test_print_summary(console: Console) -> None:
    reporter = ProgressReporter(console=console)
    reporter.print_summary()
    assert "Completed in" in console.file.getvalue()


def test_create_reporter(console: Console) -> None:
    assert isinstance(create_reporter(console=console), SimpleReporter)
    assert isinstance(create_reporter(console=console, interactive=True), ProgressReporter)
    assert isinstance(create_reporter(console=console, interactive=False), SimpleReporter)
