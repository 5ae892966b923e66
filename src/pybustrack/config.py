"""Store configuration for pybustrack."""

from __future__ import annotations

import dataclasses
import os
from pathlib import Path
from typing import Any

from pybustrack.exceptions import BusTrackConfigError

MEMORY_LOCATION = ":memory:"

_JOURNAL_MODES = frozenset({"DELETE", "TRUNCATE", "PERSIST", "MEMORY", "WAL", "OFF"})


@dataclasses.dataclass(frozen=True)
class StoreConfig:
    """Backing engine configuration.

    Parameters
    ----------
    location : str
        ``":memory:"`` for a private in-memory database, otherwise a
        filesystem path. ``~`` is expanded when the store opens.
    timeout : float
        Seconds the engine waits on a locked database file before
        failing the statement.
    journal_mode : str or None
        Optional ``PRAGMA journal_mode`` applied to file-backed databases
        (e.g. ``"WAL"``). Ignored for in-memory databases.
    """

    location: str = MEMORY_LOCATION
    timeout: float = 5.0
    journal_mode: str | None = None

    def __post_init__(self) -> None:
        if not self.location:
            raise BusTrackConfigError("location must be ':memory:' or a non-empty path")
        if self.timeout <= 0:
            raise BusTrackConfigError(f"timeout must be positive, got {self.timeout!r}")
        if self.journal_mode is not None:
            mode = self.journal_mode.strip().upper()
            if mode not in _JOURNAL_MODES:
                raise BusTrackConfigError(f"Unsupported journal_mode {self.journal_mode!r}")
            object.__setattr__(self, "journal_mode", mode)

    @property
    def is_memory(self) -> bool:
        return self.location == MEMORY_LOCATION

    @classmethod
    def in_memory(cls, **overrides: Any) -> StoreConfig:
        """Configuration for a private, non-persistent database."""
        return cls(location=MEMORY_LOCATION, **overrides)

    @classmethod
    def from_path(cls, path: str | os.PathLike[str], **overrides: Any) -> StoreConfig:
        """Configuration for a file-backed database at *path*."""
        return cls(location=str(Path(path)), **overrides)

    @classmethod
    def from_env(cls, **overrides: Any) -> StoreConfig:
        """Create configuration from environment variables.

        Reads ``BUSTRACK_DB_PATH``, ``BUSTRACK_DB_TIMEOUT`` and
        ``BUSTRACK_DB_JOURNAL_MODE``. Explicit keyword arguments override
        environment values.

        Parameters
        ----------
        **overrides
            Explicit field values that take precedence over env vars.

        Returns
        -------
        StoreConfig
            Populated configuration.
        """
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        path_env = env.get("BUSTRACK_DB_PATH")
        if path_env:
            config_kwargs["location"] = path_env

        # timeout is numeric, handle separately
        timeout_env = env.get("BUSTRACK_DB_TIMEOUT")
        if timeout_env is not None and "timeout" not in overrides:
            try:
                config_kwargs["timeout"] = float(timeout_env)
            except ValueError as exc:
                raise BusTrackConfigError(f"BUSTRACK_DB_TIMEOUT is not a number: {timeout_env!r}") from exc

        journal_env = env.get("BUSTRACK_DB_JOURNAL_MODE")
        if journal_env:
            config_kwargs["journal_mode"] = journal_env

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
