"""
config.py — Konfiguracja aplikacji przez zmienne środowiskowe.
Wszystkie zmienne mają prefiks RCALC_.
"""
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from contracts import MAX_DEPTH_LIMIT


class Settings(BaseSettings):
    # Logging
    log_level: str = "INFO"

    # Parser + interpreter: maksymalna wysokość drzewa AST
    max_depth: int = Field(default=200, ge=1, le=MAX_DEPTH_LIMIT)

    # Executor używany, gdy wywołujący nie wskaże własnego
    default_executor: Literal["interpreter", "vm"] = "interpreter"

    # App
    app_title: str = "rcalc"
    app_version: str = "0.1.0"

    model_config = SettingsConfigDict(env_prefix="RCALC_", env_file=".env", extra="ignore")
