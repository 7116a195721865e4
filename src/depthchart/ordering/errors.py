"""Exceptions raised by the depth chart ordering engine."""

from __future__ import annotations


class DepthChartError(RuntimeError):
    """Base class for depth chart operation failures."""


class PlayerNotFoundError(DepthChartError, LookupError):
    """Raised when a referenced player id is not in the snapshot."""

    def __init__(self, player_id: str):
        super().__init__(f"Player {player_id!r} not found")
        self.player_id = player_id


class InvalidRequestError(DepthChartError, ValueError):
    """Raised when an operation's arguments cannot produce a valid depth chart."""
