"""Configuration helpers for positions, phases and player statuses."""

from .positions import (
    PHASES,
    POSITION_PHASES,
    PositionGroup,
    StatusLabel,
    display_name,
    get_phase,
    get_position_group,
    is_known_position,
    iter_groups,
    iter_positions,
    normalize_position,
    status_label,
    unique_status_labels,
)

__all__ = [
    "PHASES",
    "POSITION_PHASES",
    "PositionGroup",
    "StatusLabel",
    "display_name",
    "get_phase",
    "get_position_group",
    "is_known_position",
    "iter_groups",
    "iter_positions",
    "normalize_position",
    "status_label",
    "unique_status_labels",
]
