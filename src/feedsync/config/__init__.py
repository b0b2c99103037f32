from .alert_texts import AlertTexts
from .config import AppSettings

__all__ = [
    "AlertTexts",
    "AppSettings",
]
