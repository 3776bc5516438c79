"""Formatter runtime support: configuration values and renderer caches.

Python 3.13+.
"""

from .cache import Renderer, RendererCache
from .config import FormatterConfiguration, ResolvedConfiguration

__all__ = [
    "FormatterConfiguration",
    "Renderer",
    "RendererCache",
    "ResolvedConfiguration",
]
