"""Pytest fixtures for statewalk tests."""

from __future__ import annotations

import random

import pytest

from statewalk import Machine, StatewalkSettings
from tests.machines import build_async_failing_machine, build_failing_machine, build_loop_machine


@pytest.fixture
def loop_machine() -> Machine:
    return build_loop_machine()


@pytest.fixture
def failing_machine() -> Machine:
    return build_failing_machine()


@pytest.fixture
def async_failing_machine() -> Machine:
    return build_async_failing_machine()


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def settings() -> StatewalkSettings:
    return StatewalkSettings(_env_file=None)
