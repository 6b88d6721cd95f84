"""Configuration: env-file loading and runtime settings."""

from __future__ import annotations

import os
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

DEFAULT_ENV_FILES: tuple[str, ...] = (".env", ".env.local")


def parse_env_line(line: str) -> tuple[str, str] | None:
    """Parse one ``[export ]KEY=VALUE`` line; blank, comment and malformed lines give None."""
    line = line.strip()
    if line.startswith("export "):
        line = line.removeprefix("export ").lstrip()
    key, sep, value = line.partition("=")
    key = key.strip()
    if not sep or not key or key.startswith("#"):
        return None
    value = value.strip()
    if len(value) >= 2 and value[0] == value[-1] and value[0] in {"'", '"'}:
        return key, value[1:-1]
    return key, value


def load_env_file(path: str = ".env", *, override_existing: bool = True) -> list[str]:
    """Apply an env file to ``os.environ`` and return the keys it set.

    A missing file is not an error. Keys already in the environment are kept when
    ``override_existing`` is False.
    """
    env_path = Path(path)
    if not env_path.is_file():
        return []
    applied: list[str] = []
    for raw_line in env_path.read_text(encoding="utf-8").splitlines():
        parsed = parse_env_line(raw_line)
        if parsed is None:
            continue
        key, value = parsed
        if override_existing or key not in os.environ:
            os.environ[key] = value
            applied.append(key)
    return applied


def load_default_env_files(
    *, override_existing: bool = True, paths: Sequence[str] | None = None
) -> list[str]:
    """Load env files left to right; later files win. Returns every key applied."""
    applied: list[str] = []
    for path in tuple(paths) if paths is not None else DEFAULT_ENV_FILES:
        applied.extend(load_env_file(path, override_existing=override_existing))
    return applied


@dataclass(frozen=True, slots=True)
class Settings:
    """Runtime settings resolved from the environment."""

    log_level: str = "INFO"
    log_format: str = "json"  # json|text
    log_file: str | None = None
    seed: int | None = None

    @classmethod
    def from_env(cls) -> Settings:
        log_format = os.getenv("BATTLESHIPPER_LOG_FORMAT", "json").strip().lower()
        if log_format not in {"json", "text"}:
            raise ValueError(f"Unsupported BATTLESHIPPER_LOG_FORMAT: {log_format!r}.")
        raw_seed = os.getenv("BATTLESHIPPER_SEED", "").strip()
        try:
            seed = int(raw_seed) if raw_seed else None
        except ValueError as exc:
            raise ValueError(f"BATTLESHIPPER_SEED must be an integer, got {raw_seed!r}.") from exc
        return cls(
            log_level=os.getenv("BATTLESHIPPER_LOG_LEVEL", "INFO").strip().upper() or "INFO",
            log_format=log_format,
            log_file=os.getenv("BATTLESHIPPER_LOG_FILE", "").strip() or None,
            seed=seed,
        )
