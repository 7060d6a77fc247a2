"""Notebook-to-markdown converters backed by nbconvert."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

from nbpublish.config.models import ConverterConfig
from nbpublish.converter.base import NotebookConverter
from nbpublish.converter.models import ConversionResult
from nbpublish.errors import ConversionFailedError

logger = logging.getLogger(__name__)


class NbconvertCLIConverter(NotebookConverter):
    """Shells out to ``jupyter nbconvert --to markdown``."""

    name = "nbconvert-cli"

    def __init__(self, config: ConverterConfig) -> None:
        self.config = config

    def convert(self, document_path: Path, output_dir: Path) -> ConversionResult:
        cmd = [
            *self.config.command,
            str(document_path),
            "--to",
            "markdown",
            "--output-dir",
            str(output_dir),
        ]
        logger.debug("running %s", " ".join(cmd))

        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=self.config.timeout,
            )
        except FileNotFoundError as e:
            raise ConversionFailedError(
                self.name, f"{self.config.command[0]!r} not found on PATH", cause=e
            ) from e
        except subprocess.TimeoutExpired as e:
            raise ConversionFailedError(
                self.name, f"timed out after {self.config.timeout}s", cause=e
            ) from e

        if result.returncode != 0:
            stderr = (result.stderr or "").strip()
            raise ConversionFailedError(
                self.name,
                f"exited {result.returncode}: {stderr[-500:]}",
                stderr=stderr,
            )

        return self._collect(document_path, output_dir)


class NbconvertLibraryConverter(NotebookConverter):
    """Runs nbconvert's MarkdownExporter in-process.

    Output files are laid out exactly like the CLI: extracted images go to
    ``<name>_files/`` next to ``<name>.md``.
    """

    name = "nbconvert-library"

    def __init__(self, config: ConverterConfig) -> None:
        self.config = config

    def convert(self, document_path: Path, output_dir: Path) -> ConversionResult:
        # Imported here so the cli backend works without nbconvert importable
        try:
            from nbconvert import MarkdownExporter
            from nbconvert.writers import FilesWriter
        except ImportError as e:
            raise ConversionFailedError(
                self.name, f"nbconvert is not importable: {e}", cause=e
            ) from e

        base = document_path.stem
        resources = {
            "unique_key": base,
            "output_files_dir": f"{base}_files",
        }

        try:
            body, resources = MarkdownExporter().from_filename(
                str(document_path), resources=resources
            )
            FilesWriter(build_directory=str(output_dir)).write(
                body, resources, notebook_name=base
            )
        except Exception as e:
            raise ConversionFailedError(self.name, str(e), cause=e) from e

        logger.debug(
            "exported %s (%d output files)",
            document_path,
            len(resources.get("outputs") or {}),
        )
        return self._collect(document_path, output_dir)
