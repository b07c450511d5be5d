"""
calrender.settings
------------------
Process-level settings, read from the environment (``CALRENDER_*``) and an
optional ``.env`` file. Calendar content is never configured here; see
``calrender.config`` for that.
"""
from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class EngineSettings(BaseSettings):
    # --- Logging ---
    log_level: str = "WARNING"
    log_format: str = "console"  # "json" | "console"

    # --- Print page (inches) ---
    page_width_in: float = 35.0
    page_height_in: float = 23.0
    page_margin_in: float = 0.5

    # --- PDF metadata ---
    pdf_creator: str = "calrender"
    pdf_producer: str = "calrender (svglib + reportlab)"

    # --- Glyphs ---
    # Directory of Noto-style emoji_u*.svg files layered over the built-in table
    glyph_dir: Optional[str] = None

    model_config = SettingsConfigDict(env_prefix="CALRENDER_", env_file=".env", extra="ignore")

    @property
    def page_size_pt(self):
        return (self.page_width_in * 72.0, self.page_height_in * 72.0)

    @property
    def margin_pt(self) -> float:
        return self.page_margin_in * 72.0


@lru_cache(maxsize=1)
def get_settings() -> EngineSettings:
    return EngineSettings()
