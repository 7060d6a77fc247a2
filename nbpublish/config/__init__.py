from .loader import load_config
from .models import (
    ConverterConfig,
    NbPublishConfig,
    PublishConfig,
)

__all__ = [
    "ConverterConfig",
    "NbPublishConfig",
    "PublishConfig",
    "load_config",
]
