from __future__ import annotations


class InvalidPlacementError(RuntimeError):
    """A piece was locked where the collision check would have rejected it."""
