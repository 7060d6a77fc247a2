"""Shared test fixtures for nbpublish."""

from pathlib import Path

import nbformat
import pytest
from nbformat.v4 import new_code_cell, new_markdown_cell, new_notebook, new_output

from nbpublish.config.models import NbPublishConfig, PublishConfig
from nbpublish.converter.base import NotebookConverter
from nbpublish.converter.models import ConversionResult
from nbpublish.errors import ConversionFailedError

# 1x1 transparent PNG
PNG_B64 = (
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg=="
)


class FakeConverter(NotebookConverter):
    """Writes canned artifacts instead of running nbconvert.

    ``images`` maps a base name to the image file names its notebook
    "produces"; base names not listed produce no asset directory.
    """

    name = "fake"

    def __init__(self, images=None, body="# Rendered\n", fail=False):
        self.images = images or {}
        self.body = body
        self.fail = fail
        self.calls: list[tuple[Path, Path]] = []

    def convert(self, document_path: Path, output_dir: Path) -> ConversionResult:
        self.calls.append((document_path, output_dir))
        if self.fail:
            raise ConversionFailedError(self.name, "kernel died")
        base = document_path.stem
        (output_dir / f"{base}.md").write_text(self.body)
        names = self.images.get(base, [])
        if names:
            files = output_dir / f"{base}_files"
            files.mkdir()
            for name in names:
                (files / name).write_bytes(b"\x89PNG fake")
        return self._collect(document_path, output_dir)


@pytest.fixture
def sample_config():
    return NbPublishConfig()


@pytest.fixture
def site(tmp_path):
    """A site tree with existing posts/ and assets/ directories."""
    root = tmp_path / "site"
    (root / "posts").mkdir(parents=True)
    (root / "assets").mkdir()
    return root


@pytest.fixture
def publish_config(site):
    return PublishConfig(
        posts_dir=str(site / "posts"),
        assets_dir=str(site / "assets"),
    )


@pytest.fixture
def make_notebook(tmp_path):
    """Write a real nbformat v4 notebook with ``images`` PNG outputs."""

    def _make(name: str, images: int = 0, directory: Path | None = None) -> Path:
        cells = [
            new_markdown_cell("# Notes\n\nSome prose."),
            new_code_cell("print('hello')", outputs=[
                new_output("stream", name="stdout", text="hello\n"),
            ]),
        ]
        for _ in range(images):
            cells.append(new_code_cell("plot()", outputs=[
                new_output("display_data", data={"image/png": PNG_B64, "text/plain": "<Figure>"}),
            ]))
        nb = new_notebook(cells=cells)
        target_dir = directory or tmp_path / "src"
        target_dir.mkdir(parents=True, exist_ok=True)
        path = target_dir / name
        nbformat.write(nb, str(path))
        return path

    return _make


@pytest.fixture
def fake_converter():
    """Factory for FakeConverter instances."""
    return FakeConverter
