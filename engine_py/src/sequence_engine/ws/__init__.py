"""
WebSocket server and event handling for the Sequence game.
"""

from .events import *
from .server import app

__all__ = ["app"]
