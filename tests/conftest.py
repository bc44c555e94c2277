"""Shared test fixtures."""

import sys

import pytest

# Ensure src is in path
sys.path.insert(0, "src")

from dataclasses import dataclass

from fieldcopy import CopyOptions, DescriptorRegistry
from fieldcopy.config import CopySettings


@dataclass
class FixtureUserDTO:
    id: int
    name: str
    email: str = "ann@example.com"


@dataclass
class FixtureUserRow:
    id: int = 0
    name: str = ""
    password_hash: str = ""


@pytest.fixture
def registry():
    """Fresh DescriptorRegistry, independent of the global one."""
    return DescriptorRegistry()


@pytest.fixture
def options():
    """Default option set."""
    return CopyOptions()


@pytest.fixture
def settings():
    """Settings that ignore any .env file in the working directory."""
    return CopySettings(_env_file=None)


@pytest.fixture
def user_dto_cls():
    return FixtureUserDTO


@pytest.fixture
def user_row_cls():
    return FixtureUserRow
