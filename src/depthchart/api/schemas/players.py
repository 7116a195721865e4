from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict, Field

from depthchart.models import Player


class SwapRequest(BaseModel):
    player1_id: str = Field(..., alias="player1Id", min_length=1)
    player2_id: str = Field(..., alias="player2Id", min_length=1)

    model_config = ConfigDict(populate_by_name=True)


class SwapResponse(BaseModel):
    player1: Player
    player2: Player


class MoveRequest(BaseModel):
    position: str = Field(..., min_length=1)
    order: int = Field(..., ge=1)


class MoveResponse(BaseModel):
    player: Player
    updated: List[Player]


class ReorderResponse(BaseModel):
    updated: List[str]
    skipped: List[str] = Field(default_factory=list)
