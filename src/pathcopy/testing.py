from collections.abc import Generator
from contextlib import contextmanager
from dataclasses import dataclass

import pytest

from .config import PATHCOPY_CONFIG, PathcopyConfig


@dataclass(frozen=True)
class _PathcopyConfigSnapshot:
    log_level: str
    by_alias: bool
    forbid_unknown_fields: bool

    @classmethod
    def capture(cls) -> "_PathcopyConfigSnapshot":
        return cls(
            log_level=PATHCOPY_CONFIG.log_level,
            by_alias=PATHCOPY_CONFIG.by_alias,
            forbid_unknown_fields=PATHCOPY_CONFIG.forbid_unknown_fields,
        )

    def restore(self) -> None:
        PATHCOPY_CONFIG.log_level = self.log_level
        PATHCOPY_CONFIG.by_alias = self.by_alias
        PATHCOPY_CONFIG.forbid_unknown_fields = self.forbid_unknown_fields


def _apply_test_config() -> None:
    PATHCOPY_CONFIG.log_level = "DEBUG"
    PATHCOPY_CONFIG.by_alias = True
    PATHCOPY_CONFIG.forbid_unknown_fields = True


@contextmanager
def pathcopy_test_env() -> Generator[PathcopyConfig, None, None]:
    """Run with deterministic config and restore the previous values afterwards."""
    snapshot = _PathcopyConfigSnapshot.capture()
    _apply_test_config()
    try:
        yield PATHCOPY_CONFIG
    finally:
        snapshot.restore()


@pytest.fixture()
def pathcopy_config() -> Generator[PathcopyConfig, None, None]:
    """Expose ``PATHCOPY_CONFIG`` with test defaults; changes are undone after the test."""
    with pathcopy_test_env() as config:
        yield config
