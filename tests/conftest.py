from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from sqlscript.core.splitter import ScriptSplitter
from sqlscript.dialects import get_builder_factory

if TYPE_CHECKING:
    from collections.abc import Generator

here = Path(__file__).parent
root_path = here.parent


@pytest.fixture
def generic_splitter() -> ScriptSplitter:
    return ScriptSplitter(get_builder_factory())


@pytest.fixture
def mysql_splitter() -> ScriptSplitter:
    return ScriptSplitter(get_builder_factory("mysql"))


@pytest.fixture
def restore_sqlscript_logger() -> Generator[logging.Logger, None, None]:
    """Give tests the package root logger and undo any handler changes."""
    logger = logging.getLogger("sqlscript")
    handlers, level, propagate = list(logger.handlers), logger.level, logger.propagate
    yield logger
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate
