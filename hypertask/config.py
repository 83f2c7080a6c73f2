"""Runtime settings read from the environment (and an optional ``.env`` file)."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

DEFAULT_STATIC_DIR = Path(__file__).parent / "static"

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def _get_bool_env(key: str, default: bool) -> bool:
    value = os.getenv(key, str(default)).lower()
    return value in ("true", "1", "yes", "on")


def _get_int_env(key: str, default: int) -> int:
    try:
        return int(os.getenv(key, str(default)))
    except ValueError:
        return default


@dataclass
class Settings:
    """Server settings.

    Attributes:
        host: Interface to bind (``HYPERTASK_HOST``).
        port: Port to bind (``HYPERTASK_PORT``).
        static_dir: Directory served for every path outside ``/api``
            (``HYPERTASK_STATIC_DIR``).
        seed: Insert the three example tasks at startup (``HYPERTASK_SEED``).
        log_level: Root log level name (``HYPERTASK_LOG_LEVEL``).
    """

    host: str = "127.0.0.1"
    port: int = 8070
    static_dir: Path = field(default_factory=lambda: DEFAULT_STATIC_DIR)
    seed: bool = True
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, env_file: str | os.PathLike[str] | None = None) -> Settings:
        """Load settings, letting a ``.env`` file fill in unset variables."""
        load_dotenv(env_file)
        static_dir = os.getenv("HYPERTASK_STATIC_DIR")
        return cls(
            host=os.getenv("HYPERTASK_HOST", cls.host),
            port=_get_int_env("HYPERTASK_PORT", cls.port),
            static_dir=Path(static_dir) if static_dir else DEFAULT_STATIC_DIR,
            seed=_get_bool_env("HYPERTASK_SEED", cls.seed),
            log_level=os.getenv("HYPERTASK_LOG_LEVEL", cls.log_level).upper(),
        )


def configure_logging(level: str = "INFO") -> None:
    """Send log records to stderr in a single-line format."""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT, force=True)
