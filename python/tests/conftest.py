"""
Pytest configuration and fixtures for devconsole tests.
"""
import sys
from pathlib import Path

import pytest

PYTHON_SRC = Path(__file__).resolve().parents[1]
if str(PYTHON_SRC) not in sys.path:
    sys.path.append(str(PYTHON_SRC))

from devconsole.console import DevConsole


@pytest.fixture
def console():
    """A console with the built-in commands and an empty log."""
    instance = DevConsole()
    instance.output.clear()
    return instance
