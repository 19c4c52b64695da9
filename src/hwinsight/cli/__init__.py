"""
Command-line interface for the hwinsight package.
"""

from .main import main_cli

__all__ = [
    "main_cli",
]
