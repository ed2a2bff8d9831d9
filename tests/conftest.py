"""Pytest configuration and fixtures for progression tests."""

from __future__ import annotations

import logging
from typing import List

import pytest

from progression.core.config import set_config
from progression.core.types import ProgressChangedInfo
from progression.logging.setup import ROOT_LOGGER
from progression.progress.stack import ProgressStack, set_stack


class Recorder:
    """Progress callback that keeps every notification it receives."""

    def __init__(self) -> None:
        self.infos: List[ProgressChangedInfo] = []

    def __call__(self, info: ProgressChangedInfo) -> None:
        self.infos.append(info)

    @property
    def values(self) -> List[float]:
        return [info.progress for info in self.infos]

    @property
    def count(self) -> int:
        return len(self.infos)


@pytest.fixture(autouse=True)
def isolated_state():
    """Fresh configuration and default stack for every test."""
    set_config(None)
    set_stack(None)
    yield
    set_config(None)
    set_stack(None)


@pytest.fixture
def stack() -> ProgressStack:
    """Fixture providing an isolated task stack."""
    return ProgressStack()


@pytest.fixture
def recorder() -> Recorder:
    return Recorder()


@pytest.fixture
def make_recorder():
    """Factory for additional recorders within one test."""
    return Recorder


@pytest.fixture
def clean_logging():
    """Remove handlers added to the progression logger by a test."""
    yield
    root_logger = logging.getLogger(ROOT_LOGGER)
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()
    root_logger.setLevel(logging.NOTSET)
