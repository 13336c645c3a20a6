from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

import pytest

from objcgen.entities import EntityStore
from objcgen.resolver import SignatureResolver
from tests._fixtures.doxygen_builder import DoxygenBuilder


@pytest.fixture(autouse=True)
def _reset_objcgen_logger() -> Iterator[None]:
    """Drop handlers installed by CLI runs so they never outlive captured streams."""
    yield
    logger = logging.getLogger("objcgen")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def doxygen_builder(tmp_path: Path) -> DoxygenBuilder:
    """Provide a Doxygen XML tree rooted at the pytest tmp_path."""
    return DoxygenBuilder(tmp_path)


@pytest.fixture
def store() -> EntityStore:
    return EntityStore()


@pytest.fixture
def resolver(store: EntityStore) -> SignatureResolver:
    return SignatureResolver(store)
