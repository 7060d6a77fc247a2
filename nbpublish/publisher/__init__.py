"""Notebook publishing pipeline."""

from nbpublish.publisher.models import PublishResult
from nbpublish.publisher.publisher import NOTEBOOK_SUFFIX, Publisher, rewrite_asset_links

__all__ = [
    "NOTEBOOK_SUFFIX",
    "PublishResult",
    "Publisher",
    "rewrite_asset_links",
]
