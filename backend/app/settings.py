from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv


DEFAULT_MODEL = "gemini-1.5-flash"
DEFAULT_MAX_RETRIES = 3
DEFAULT_SCHEMA_MAX_DEPTH = 32


@dataclass(frozen=True)
class Settings:
    google_api_key: str | None = None
    llm_model: str = DEFAULT_MODEL
    max_retries: int = DEFAULT_MAX_RETRIES
    schema_max_depth: int = DEFAULT_SCHEMA_MAX_DEPTH
    cors_allow_origins: tuple[str, ...] = ("*",)
    debug: bool = False


def _load_env_file() -> None:
    # settings.py lives in backend/app -> project root is two levels up from app/
    project_root = Path(__file__).resolve().parent.parent.parent
    for env_path in (project_root / ".env", Path.cwd() / ".env"):
        if env_path.exists():
            # Do NOT override already-set environment variables (shell should win).
            load_dotenv(dotenv_path=env_path, override=False)
            return
    load_dotenv(override=False)


def _int_env(name: str, default: int, minimum: int = 0) -> int:
    try:
        value = int((os.getenv(name) or "").strip())
    except ValueError:
        return default
    return value if value >= minimum else default


def _origins_env(name: str) -> tuple[str, ...]:
    raw = (os.getenv(name) or "*").strip()
    origins = tuple(o.strip() for o in raw.split(",") if o.strip())
    return origins or ("*",)


def load_settings(*, load_env_file: bool = True) -> Settings:
    """
    Central configuration, read once at process start.

    Priority for the credential:
      1) GOOGLE_API_KEY
      2) GEMINI_API_KEY

    The key is handed to the generation client explicitly; nothing downstream
    re-reads the environment per request.
    """
    if load_env_file:
        _load_env_file()

    api_key = (os.getenv("GOOGLE_API_KEY") or os.getenv("GEMINI_API_KEY") or "").strip()

    return Settings(
        google_api_key=api_key or None,
        llm_model=(os.getenv("LLM_MODEL") or DEFAULT_MODEL).strip(),
        max_retries=_int_env("EXTRACT_MAX_RETRIES", DEFAULT_MAX_RETRIES),
        schema_max_depth=_int_env("SCHEMA_MAX_DEPTH", DEFAULT_SCHEMA_MAX_DEPTH, minimum=1),
        cors_allow_origins=_origins_env("CORS_ALLOW_ORIGINS"),
        debug=os.getenv("EXTRACT_DEBUG", "false").strip().lower() == "true",
    )
