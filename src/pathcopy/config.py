import logging
import os

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean (1/0, true/false, yes/no, on/off)")


def _env_log_level(name: str, default: str) -> str:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    level = raw.strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ValueError(f"{name} must be a logging level name, got {raw!r}")
    return level


class PathcopyConfig:
    """Process-wide defaults for pathcopy.

    Values are read from the environment once; assign attributes to change them
    at runtime.
    """

    def __init__(self) -> None:
        self.log_level = _env_log_level("PATHCOPY_LOG_LEVEL", "WARNING")
        self.by_alias = _env_bool("PATHCOPY_BY_ALIAS", True)
        self.forbid_unknown_fields = _env_bool("PATHCOPY_FORBID_UNKNOWN_FIELDS", True)

    def __repr__(self) -> str:
        return (
            f"PathcopyConfig(log_level={self.log_level!r}, by_alias={self.by_alias!r}, "
            f"forbid_unknown_fields={self.forbid_unknown_fields!r})"
        )


PATHCOPY_CONFIG = PathcopyConfig()
