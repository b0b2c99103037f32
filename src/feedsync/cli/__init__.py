from .cli import main_cli

__all__ = [
    "main_cli",
]
