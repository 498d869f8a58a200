"""Scene module for primitive containers and ready-made scenes.

Components:
    intersection: Scene container with a linear closest-hit scan
    cornell_box: Factory for the reference Cornell box scene
"""

from .cornell_box import CornellBoxParams, create_cornell_box_scene
from .intersection import Scene, closest_intersection

__all__ = [
    "Scene",
    "closest_intersection",
    "CornellBoxParams",
    "create_cornell_box_scene",
]
