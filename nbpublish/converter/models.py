"""Pydantic models for the notebook conversion subsystem."""

from __future__ import annotations

from pydantic import BaseModel


class ConversionResult(BaseModel):
    """Artifacts a converter left in its output directory."""

    source_path: str
    post_path: str  # <name>.md
    assets_dir: str | None = None  # <name>_files/, only when the notebook had images
