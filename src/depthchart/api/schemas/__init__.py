"""Pydantic models for API I/O."""

from .chart import (
    DepthChartResponse,
    PhaseResponse,
    PositionDepthResponse,
    PositionGroupResponse,
    StatusLabelResponse,
)
from .players import MoveRequest, MoveResponse, ReorderResponse, SwapRequest, SwapResponse

__all__ = [
    "DepthChartResponse",
    "PhaseResponse",
    "PositionDepthResponse",
    "PositionGroupResponse",
    "StatusLabelResponse",
    "MoveRequest",
    "MoveResponse",
    "ReorderResponse",
    "SwapRequest",
    "SwapResponse",
]
