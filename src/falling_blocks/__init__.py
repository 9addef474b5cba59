"""Falling-block puzzle rules engine with gymnasium and pygame front ends."""

from .game import Action, GameConfig, GameSession, Snapshot

__all__ = ["Action", "GameConfig", "GameSession", "Snapshot"]

__version__ = "0.1.0"
