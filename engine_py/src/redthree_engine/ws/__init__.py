"""
WebSocket server and event handling for the Red Three game.
"""

from .events import *
from .server import app

__all__ = ["app"]
