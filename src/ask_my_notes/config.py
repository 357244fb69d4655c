from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError

NOTES_URL_ENV = "ASK_MY_NOTES_URL"


class AppConfig(BaseModel):
    notes_dir: Path = Field(default=Path("data/notes"))
    # Base URL serving index.json and the note files. Takes precedence over notes_dir.
    notes_url: Optional[str] = Field(default=None)
    top_k: int = Field(default=5, ge=1)
    request_timeout: float = Field(default=10.0, gt=0)

    @property
    def notes_dir_resolved(self) -> Path:
        return self.notes_dir.resolve()


def load_config(path: Optional[Path] = None) -> AppConfig:
    """
    Load configuration from a YAML file.

    If `path` is None, looks for `config.yaml` in the current working directory.
    Also loads environment variables from a `.env` file if present; a
    ASK_MY_NOTES_URL variable overrides `notes_url`.
    """
    load_dotenv()

    if path is None:
        path = Path("config.yaml")

    raw = {}
    if path.exists():
        with path.open("r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}

    if not isinstance(raw, dict):
        raise SystemExit(f"Invalid configuration in {path}:\nexpected a mapping of settings")

    env_url = os.getenv(NOTES_URL_ENV)
    if env_url:
        raw["notes_url"] = env_url

    try:
        cfg = AppConfig(**raw)
    except ValidationError as e:
        raise SystemExit(f"Invalid configuration in {path}:\n{e}") from e

    return cfg


__all__ = ["AppConfig", "load_config"]
