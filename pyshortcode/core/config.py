#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Engine configuration.

All values can be overridden via environment variables (``SHORTCODE_*``)
or a .env file.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

from functools import lru_cache
from typing import Literal, Optional

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


_FORBIDDEN_DELIMITER_CHARS = set("\"'/ \t\r\n")


# -----------------------------------------------------------------------------

class Settings(BaseSettings):

    model_config = SettingsConfigDict(
        env_prefix="SHORTCODE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ── Syntax ─────────────────────────────────────────────────────────────

    open_delimiter: str = "<%"
    close_delimiter: str = "%>"

    # ── Expansion ──────────────────────────────────────────────────────────

    max_depth: int = Field(default=20, ge=1)
    max_concurrency: int = Field(default=16, ge=0)      # 0 = unbounded
    handler_timeout: Optional[float] = Field(default=None, gt=0)

    # ── Build ──────────────────────────────────────────────────────────────

    max_parallel_documents: int = Field(default=8, ge=1)
    on_error: Literal["abort", "skip"] = "abort"

    @model_validator(mode="after")
    def _check_delimiters(self) -> "Settings":
        for label, value in (("open_delimiter", self.open_delimiter),
                             ("close_delimiter", self.close_delimiter)):
            if not value:
                raise ValueError(f"{label} must not be empty")
            bad = _FORBIDDEN_DELIMITER_CHARS.intersection(value)
            if bad:
                raise ValueError(f"{label} contains reserved characters: {sorted(bad)!r}")
        if self.open_delimiter == self.close_delimiter:
            raise ValueError("open_delimiter and close_delimiter must differ")
        return self


# -----------------------------------------------------------------------------

@lru_cache
def get_settings() -> Settings:
    return Settings()


# -----------------------------------------------------------------------------
