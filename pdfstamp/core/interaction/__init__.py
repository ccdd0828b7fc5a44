"""
Interaction state machine for placing and moving annotations.
"""
from .events import EventEmitter, SurfaceEvent, SurfaceEventType
from .surface import DragState, EditorMode, InteractionSurface

__all__ = [
    'EventEmitter',
    'SurfaceEvent',
    'SurfaceEventType',
    'DragState',
    'EditorMode',
    'InteractionSurface',
]
