from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

import pytest

from tests._fixtures.source_builder import SourceTreeBuilder


@pytest.fixture
def source_tree(tmp_path: Path) -> SourceTreeBuilder:
    """Provide a reusable Go source tree rooted at the pytest tmp_path."""
    return SourceTreeBuilder(tmp_path)


@pytest.fixture(autouse=True)
def _reset_go2md_logger() -> Iterator[None]:
    """Undo CLI logging setup so handlers never outlive the captured streams."""
    yield
    logger = logging.getLogger("go2md")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
