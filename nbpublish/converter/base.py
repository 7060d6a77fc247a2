"""Abstract notebook converter interface for nbpublish."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path

from nbpublish.converter.models import ConversionResult
from nbpublish.errors import ConversionFailedError

logger = logging.getLogger(__name__)


class NotebookConverter(ABC):
    """Renders a notebook into ``<name>.md`` plus an optional ``<name>_files/``.

    Implementations write both artifacts side by side into ``output_dir``
    and raise ConversionFailedError on any failure. The Publisher only
    relies on this contract, never on how the rendering is done.
    """

    name: str = "converter"

    @abstractmethod
    def convert(self, document_path: Path, output_dir: Path) -> ConversionResult:
        """Convert one notebook into ``output_dir``."""
        ...

    def _collect(self, document_path: Path, output_dir: Path) -> ConversionResult:
        """Check the expected artifacts exist and describe them."""
        base = document_path.stem
        post = output_dir / f"{base}.md"
        if not post.is_file():
            raise ConversionFailedError(
                self.name, f"expected output {post} was not produced"
            )

        assets = output_dir / f"{base}_files"
        if not assets.is_dir():
            logger.debug("no asset directory produced for %s", document_path)
            return ConversionResult(source_path=str(document_path), post_path=str(post))

        return ConversionResult(
            source_path=str(document_path),
            post_path=str(post),
            assets_dir=str(assets),
        )
