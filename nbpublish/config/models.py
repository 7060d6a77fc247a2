from pydantic import BaseModel, Field
from typing import Literal


class PublishConfig(BaseModel):
    posts_dir: str = "../_posts"
    assets_dir: str = "../assets/images"
    on_overwrite: Literal["silent", "warn"] = "warn"
    prune_stale_assets: bool = True
    asset_url_prefix: str | None = None
    staging_dir: str | None = None


class ConverterConfig(BaseModel):
    backend: Literal["cli", "library"] = "cli"
    command: list[str] = ["jupyter", "nbconvert"]
    timeout: int = 300


class NbPublishConfig(BaseModel):
    publish: PublishConfig = Field(default_factory=PublishConfig)
    converter: ConverterConfig = Field(default_factory=ConverterConfig)
    log_level: Literal["debug", "info", "warn", "error"] = "info"
