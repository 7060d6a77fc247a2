"""Pydantic models for publish results."""

from __future__ import annotations

from pydantic import BaseModel


class PublishResult(BaseModel):
    """Outcome of publishing (or planning to publish) one notebook."""

    source_path: str
    base_name: str
    post_path: str
    assets_path: str | None = None
    overwrote_post: bool = False
    overwrote_assets: bool = False
    pruned_assets: bool = False
    dry_run: bool = False
