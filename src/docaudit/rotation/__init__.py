"""Rotation module — round-robin cursor over the sorted document list."""

from docaudit.rotation.cursor import select_next

__all__ = ["select_next"]
