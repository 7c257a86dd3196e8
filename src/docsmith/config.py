"""Configuration management for docsmith."""

import os

from dotenv import load_dotenv
from pydantic import BaseModel

load_dotenv()


class Settings(BaseModel):
    """Application settings."""

    # Logging
    log_level: str = os.getenv("DOCSMITH_LOG_LEVEL", "INFO")

    # Image geometry: English Metric Units per pixel (914400 EMU/inch at 96 DPI)
    emu_per_pixel: int = int(os.getenv("DOCSMITH_EMU_PER_PIXEL", "9525"))

    # Fragment (altChunk) settings
    fragment_id_prefix: str = os.getenv("DOCSMITH_FRAGMENT_ID_PREFIX", "AltChunk")
    fragment_charset: str = os.getenv("DOCSMITH_FRAGMENT_CHARSET", "utf-8")

    # Composite table fill - remove nested tables from fragments placed in cells
    strip_fragment_tables: bool = (
        os.getenv("DOCSMITH_STRIP_FRAGMENT_TABLES", "true").lower() == "true"
    )


settings = Settings()
