from .base import BaseProvider
from .deepl import DeepLProvider

__all__ = ["BaseProvider", "DeepLProvider"]
