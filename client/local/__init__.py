"""
Local game session module.

Keeps score for one table on one device.
"""

from .controller import LocalGameController

__all__ = ["LocalGameController"]
