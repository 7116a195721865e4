from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from depthchart.models import Player


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PositionDepthResponse(_CamelModel):
    code: str
    display_name: str
    players: List[Player]


class PositionGroupResponse(_CamelModel):
    name: str
    positions: List[PositionDepthResponse]


class PhaseResponse(_CamelModel):
    phase: str
    groups: List[PositionGroupResponse]


class DepthChartResponse(_CamelModel):
    phases: List[PhaseResponse]
    unassigned: List[Player] = Field(default_factory=list)


class StatusLabelResponse(_CamelModel):
    code: str
    label: str
    full_label: str
