"""Core configuration.

Why here:
- Centralises environment variables (pydantic-settings) without polluting the CLI.
- Lets adapters (HTTP) and services read config consistently.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_user_config_dir() -> Path:
    """Per-user configuration directory (cross-platform, no dependencies)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "animal-votes"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "animal-votes"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "animal-votes"
    return Path.home() / ".config" / "animal-votes"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str | None]) -> Path:
    """Write/update variables in the user's global .env."""

    env_path = get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# animal-votes user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Central application settings.

    Why pydantic-settings:
    - Typing + validation at the edge (env vars) without leaking into the core.
    - One configuration contract shared by the CLI and adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="ANIMAL_VOTES_",
        extra="ignore",
        case_sensitive=False,
        # Order: project first (dev), then the user's global config.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    base_url: str = Field(
        default="http://localhost:3000",
        min_length=8,
        description="Base URL of the JSON collection server.",
    )
    resource: str = Field(
        default="characters",
        min_length=1,
        pattern=r"^[A-Za-z0-9_\-]+$",
        description="Collection name appended to the base URL.",
    )
    http_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="Per-request timeout (seconds).",
    )
    user_agent: str = Field(
        default="animal-votes/0.1",
        min_length=1,
        description="User-Agent sent with every request.",
    )

    discard_stale_selections: bool = Field(
        default=False,
        description=(
            "When two selections overlap, keep the most recently requested one "
            "instead of whichever response arrives last."
        ),
    )

    log_level: str = Field(
        default="WARNING",
        pattern=r"^(DEBUG|INFO|WARNING|ERROR|CRITICAL|debug|info|warning|error|critical)$",
        description="Root log level for the CLI.",
    )

    @property
    def collection_url(self) -> str:
        return f"{self.base_url.rstrip('/')}/{self.resource}"
