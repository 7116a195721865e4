"""Depth chart ordering engine."""

from .engine import (
    apply_updates,
    find_density_violations,
    group_by_position,
    list_all,
    move_to_position,
    normalize_orders,
    reorder_within_position,
    swap,
)
from .errors import DepthChartError, InvalidRequestError, PlayerNotFoundError

__all__ = [
    "DepthChartError",
    "InvalidRequestError",
    "PlayerNotFoundError",
    "apply_updates",
    "find_density_violations",
    "group_by_position",
    "list_all",
    "move_to_position",
    "normalize_orders",
    "reorder_within_position",
    "swap",
]
