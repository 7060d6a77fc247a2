"""YAML config loading with env var expansion and destination overrides."""

import os
import re
from pathlib import Path

import yaml
from pydantic import ValidationError

from .models import NbPublishConfig

# Env vars that override the two destination directories after file loading
POSTS_DIR_ENV = "NBPUBLISH_POSTS_DIR"
ASSETS_DIR_ENV = "NBPUBLISH_ASSETS_DIR"


def load_config(cli_path: str | None = None) -> NbPublishConfig:
    """Load config with resolution order: CLI > project-local > user-global > defaults.

    Destination env vars are applied on top of whichever source won.
    """
    config_paths = [
        Path(cli_path) if cli_path else None,
        Path("./nbpublish.yaml"),
        Path.home() / ".nbpublish" / "config.yaml",
    ]

    if cli_path and not Path(cli_path).exists():
        raise ValueError(f"Config file not found: {cli_path}")

    config = NbPublishConfig()
    for path in config_paths:
        if path and path.exists():
            try:
                with open(path) as f:
                    raw = yaml.safe_load(f)
                if raw is None:
                    continue
                raw = _expand_env_vars(raw)
                config = NbPublishConfig(**raw)
                break
            except yaml.YAMLError as e:
                raise ValueError(f"Invalid YAML in {path}: {e}") from e
            except (TypeError, ValidationError) as e:
                raise ValueError(f"Invalid config in {path}: {e}") from e

    return _apply_env_overrides(config)


def _expand_env_vars(obj: object) -> object:
    """Recursively expand ${VAR} references in strings."""
    if isinstance(obj, str):
        return re.sub(r"\$\{(\w+)\}", lambda m: os.environ.get(m.group(1), ""), obj)
    elif isinstance(obj, dict):
        return {k: _expand_env_vars(v) for k, v in obj.items()}
    elif isinstance(obj, list):
        return [_expand_env_vars(v) for v in obj]
    return obj


def _apply_env_overrides(config: NbPublishConfig) -> NbPublishConfig:
    updates: dict[str, str] = {}
    if os.environ.get(POSTS_DIR_ENV):
        updates["posts_dir"] = os.environ[POSTS_DIR_ENV]
    if os.environ.get(ASSETS_DIR_ENV):
        updates["assets_dir"] = os.environ[ASSETS_DIR_ENV]
    if not updates:
        return config
    return config.model_copy(
        update={"publish": config.publish.model_copy(update=updates)}
    )


# Default YAML template for `nbpublish config init`
DEFAULT_CONFIG_TEMPLATE = """\
# nbpublish.yaml

# Destinations (must already exist; relative to where nbpublish runs)
publish:
  posts_dir: "../_posts"
  assets_dir: "../assets/images"
  on_overwrite: "warn"         # silent | warn
  prune_stale_assets: true     # drop an old <name>_files/ when a run yields no images
  # asset_url_prefix: "/assets/images"   # rewrite <name>_files/ links in the post
  # staging_dir: ".nbpublish"            # default: fresh temp directory per run

# Notebook converter
converter:
  backend: "cli"               # cli | library
  command: ["jupyter", "nbconvert"]
  timeout: 300

# Logging
log_level: "info"              # debug | info | warn | error
"""
