"""monday.com board integration."""

from .client import BoardRequestError, MondayClient
from .config import BoardSettings

__all__ = ["BoardRequestError", "BoardSettings", "MondayClient"]
