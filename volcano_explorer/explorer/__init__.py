"""Interaction state and session controller."""

from .session import VolcanoSession
from .state import DragRect, InteractionState, ZoomWindow

__all__ = ["VolcanoSession", "InteractionState", "DragRect", "ZoomWindow"]
