from .loader import load_config
from .models import (
    MdRenderConfig,
    OutputConfig,
    RendererConfig,
    SourceConfig,
)

__all__ = [
    "MdRenderConfig",
    "OutputConfig",
    "RendererConfig",
    "SourceConfig",
    "load_config",
]
