"""Shared pytest fixtures for the Sprout test suite."""

from __future__ import annotations

import io

import pytest

from sprout.environment import Environment
from sprout.evaluator import Evaluator


@pytest.fixture
def env():
    return Environment()


@pytest.fixture
def out():
    return io.StringIO()


@pytest.fixture
def evaluator(out):
    return Evaluator(out)
