"""Pytest configuration for the cs2ts test suite."""

import sys
from pathlib import Path

import pytest

# Add repository root to path for cs2ts imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from cs2ts.converter import Converter  # noqa: E402


@pytest.fixture
def convert():
    """Run a fresh Converter over an AST dict and return the emitted text."""

    def _convert(ast, strict=False):
        return Converter(ast, strict=strict).run()

    return _convert


@pytest.fixture
def convert_lines(convert):
    def _convert_lines(ast, strict=False):
        return convert(ast, strict=strict).split("\n")

    return _convert_lines
