"""Converts one notebook and moves its post and asset bundle into the site."""

from __future__ import annotations

import logging
import os
import re
import shutil
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from urllib.parse import quote

from nbpublish.config.models import PublishConfig
from nbpublish.converter.base import NotebookConverter
from nbpublish.converter.models import ConversionResult
from nbpublish.errors import (
    ConversionFailedError,
    RelocationFailedError,
    SourceNotFoundError,
)
from nbpublish.publisher.models import PublishResult

logger = logging.getLogger(__name__)

NOTEBOOK_SUFFIX = ".ipynb"


def rewrite_asset_links(markdown: str, base_name: str, prefix: str) -> str:
    """Point ``<base>_files/...`` references in markdown/HTML at ``prefix``.

    Only references that open a link target or an attribute value are
    rewritten, so prose mentioning the directory name is left alone.
    """
    folder = f"{base_name}_files/"
    quoted = quote(folder)
    # nbconvert percent-encodes image paths, so match both spellings
    alternatives = {re.escape(folder), re.escape(quoted)}
    pattern = re.compile(
        r"(?<=[(\"'])(?:\./)?(?:" + "|".join(sorted(alternatives)) + ")"
    )
    target = f"{prefix.rstrip('/')}/{quoted}"
    return pattern.sub(lambda _: target, markdown)


def _remove(path: Path) -> None:
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    elif path.exists() or path.is_symlink():
        path.unlink()


class Publisher:
    """Converts a notebook and relocates its artifacts into the site tree.

    The flow is strictly linear: validate source, convert into a staging
    directory, move ``<name>.md`` to the posts directory, then move
    ``<name>_files/`` to the assets directory. Destinations are replaced,
    never merged, and are never created here.
    """

    def __init__(self, config: PublishConfig, converter: NotebookConverter) -> None:
        self.config = config
        self.converter = converter
        self.posts_dir = Path(config.posts_dir)
        self.assets_dir = Path(config.assets_dir)

        # Staging is cleared per base name, so it must never be a destination
        if config.staging_dir is not None:
            staging = Path(config.staging_dir).resolve()
            for name, directory in (("posts", self.posts_dir), ("assets", self.assets_dir)):
                if staging == directory.resolve():
                    raise ValueError(
                        f"staging_dir {config.staging_dir!r} must differ from the "
                        f"{name} directory {str(directory)!r}"
                    )

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def publish(self, document: str | Path) -> PublishResult:
        """Convert ``document`` and publish its post and images."""
        source = self._resolve_source(document)
        base = source.stem
        logger.info("publishing %s via %s", source, self.converter.name)

        with self._staging(base) as staging:
            conversion = self._convert(source, staging)

            if self.config.asset_url_prefix:
                post_file = Path(conversion.post_path)
                post_file.write_text(
                    rewrite_asset_links(
                        post_file.read_text(encoding="utf-8"),
                        base,
                        self.config.asset_url_prefix,
                    ),
                    encoding="utf-8",
                )

            post_dest, overwrote_post = self._move_post(conversion, base)
            assets_dest, overwrote_assets, pruned = self._move_assets(conversion, base)

        return PublishResult(
            source_path=str(source),
            base_name=base,
            post_path=str(post_dest),
            assets_path=str(assets_dest) if assets_dest else None,
            overwrote_post=overwrote_post,
            overwrote_assets=overwrote_assets,
            pruned_assets=pruned,
        )

    def plan(self, document: str | Path) -> PublishResult:
        """Describe where ``document`` would be published, touching nothing.

        ``assets_path`` is the candidate bundle location; whether it gets
        used depends on the notebook actually producing images.
        """
        source = self._resolve_source(document)
        base = source.stem
        post_dest = self.posts_dir / f"{base}.md"
        assets_dest = self.assets_dir / f"{base}_files"
        return PublishResult(
            source_path=str(source),
            base_name=base,
            post_path=str(post_dest),
            assets_path=str(assets_dest),
            overwrote_post=post_dest.exists(),
            overwrote_assets=assets_dest.exists(),
            dry_run=True,
        )

    # ------------------------------------------------------------------
    # Stages
    # ------------------------------------------------------------------

    @staticmethod
    def _resolve_source(document: str | Path) -> Path:
        path = Path(document)
        if not path.exists():
            raise SourceNotFoundError(str(document))
        if not path.is_file():
            raise SourceNotFoundError(str(document), "not a file")
        if path.suffix.lower() != NOTEBOOK_SUFFIX:
            raise SourceNotFoundError(
                str(document), f"expected a {NOTEBOOK_SUFFIX} notebook"
            )
        if not os.access(path, os.R_OK):
            raise SourceNotFoundError(str(document), "not readable")
        return path.resolve()

    @contextmanager
    def _staging(self, base: str) -> Iterator[Path]:
        """Yield an output directory for the converter.

        A configured staging directory is reused across runs, so leftovers
        for this base name are cleared first.
        """
        if self.config.staging_dir is None:
            with tempfile.TemporaryDirectory(prefix="nbpublish-") as tmp:
                yield Path(tmp)
            return

        staging = Path(self.config.staging_dir)
        staging.mkdir(parents=True, exist_ok=True)
        (staging / f"{base}.md").unlink(missing_ok=True)
        shutil.rmtree(staging / f"{base}_files", ignore_errors=True)
        yield staging

    def _convert(self, source: Path, staging: Path) -> ConversionResult:
        try:
            return self.converter.convert(source, staging)
        except ConversionFailedError:
            raise
        except Exception as e:
            raise ConversionFailedError(self.converter.name, str(e), cause=e) from e

    def _move_post(self, conversion: ConversionResult, base: str) -> tuple[Path, bool]:
        self._check_destination(self.posts_dir, "post", partial=False)
        dest = self.posts_dir / f"{base}.md"
        overwrote = dest.exists()
        if overwrote:
            self._note_overwrite(dest)

        try:
            shutil.move(conversion.post_path, dest)
        except OSError as e:
            raise RelocationFailedError("post", str(dest), str(e), cause=e) from e

        logger.info("moved post to %s", dest)
        return dest, overwrote

    def _move_assets(
        self, conversion: ConversionResult, base: str
    ) -> tuple[Path | None, bool, bool]:
        """Move the asset bundle; returns (destination, overwrote, pruned)."""
        dest = self.assets_dir / f"{base}_files"

        if conversion.assets_dir is None:
            if self.config.prune_stale_assets and dest.is_dir():
                try:
                    shutil.rmtree(dest)
                except OSError as e:
                    raise RelocationFailedError(
                        "assets", str(dest), str(e), partial=True, cause=e
                    ) from e
                logger.info("removed stale asset bundle %s", dest)
                return None, False, True
            return None, False, False

        self._check_destination(self.assets_dir, "assets", partial=True)
        overwrote = dest.exists()
        backup: Path | None = None
        try:
            if overwrote:
                self._note_overwrite(dest)
                backup = dest.with_name(f".{dest.name}.old")
                _remove(backup)
                dest.rename(backup)
            shutil.move(conversion.assets_dir, dest)
        except OSError as e:
            # The previous bundle survives a failed move
            if backup is not None and backup.exists() and not dest.exists():
                backup.rename(dest)
            raise RelocationFailedError(
                "assets", str(dest), str(e), partial=True, cause=e
            ) from e

        if backup is not None:
            _remove(backup)
        logger.info("moved assets to %s", dest)
        return dest, overwrote, False

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _check_destination(directory: Path, artifact: str, *, partial: bool) -> None:
        if not directory.is_dir():
            raise RelocationFailedError(
                artifact, str(directory), "destination directory does not exist",
                partial=partial,
            )
        if not os.access(directory, os.W_OK | os.X_OK):
            raise RelocationFailedError(
                artifact, str(directory), "destination directory is not writable",
                partial=partial,
            )

    def _note_overwrite(self, dest: Path) -> None:
        if self.config.on_overwrite == "warn":
            logger.warning("replacing existing %s", dest)
        else:
            logger.debug("replacing existing %s", dest)
