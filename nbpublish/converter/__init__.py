"""Notebook conversion subsystem: swappable nbconvert backends."""

from nbpublish.config.models import ConverterConfig
from nbpublish.converter.base import NotebookConverter
from nbpublish.converter.models import ConversionResult
from nbpublish.converter.nbconvert import (
    NbconvertCLIConverter,
    NbconvertLibraryConverter,
)

_BACKEND_MAP: dict[str, type[NotebookConverter]] = {
    "cli": NbconvertCLIConverter,
    "library": NbconvertLibraryConverter,
}


def create_converter(config: ConverterConfig) -> NotebookConverter:
    """Create a notebook converter from config."""
    cls = _BACKEND_MAP.get(config.backend)
    if cls is None:
        raise ValueError(
            f"Unsupported converter backend: {config.backend!r}. "
            f"Supported: {', '.join(_BACKEND_MAP)}"
        )
    return cls(config)


__all__ = [
    "ConversionResult",
    "NbconvertCLIConverter",
    "NbconvertLibraryConverter",
    "NotebookConverter",
    "create_converter",
]
