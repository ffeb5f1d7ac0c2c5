"""Client configuration.

Notes:
- Environment variables are read with pydantic-settings, never inside the
  facade itself: the library only needs the token passed to `EANSearch`.
- The per-user `.env` lets the CLI keep the API token without editing a
  project file (`eansearch doctor set-token`).
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

API_HOST = "api.ean-search.org"
API_PATH = "/api"
API_BASE_URL = f"https://{API_HOST}{API_PATH}"


def get_user_config_dir() -> Path:
    """Per-user configuration directory (cross-platform, no extra dependency)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "eansearch"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "eansearch"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "eansearch"
    return Path.home() / ".config" / "eansearch"


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


def write_user_env_vars(values: dict[str, str], env_path: Path | None = None) -> Path:
    """Write or update variables in the user's global `.env`."""

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# eansearch user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Central settings for the client and the CLI."""

    model_config = SettingsConfigDict(
        env_prefix="EAN_SEARCH_",
        extra="ignore",
        case_sensitive=False,
        # Later files win: the project `.env` overrides the user-wide one.
        env_file=(str(get_user_env_file()), ".env"),
        env_file_encoding="utf-8",
    )

    api_token: str | None = Field(
        default=None,
        description="EAN-Search API token (EAN_SEARCH_API_TOKEN).",
    )
    user_agent: str = Field(
        default="eansearch-python/0.1",
        min_length=1,
        description="User-Agent header sent with every request.",
    )
    log_level: str = Field(
        default="WARNING",
        min_length=1,
        description="Log level used by the CLI logging handler.",
    )
