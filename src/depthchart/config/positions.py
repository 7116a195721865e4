"""Position vocabulary, phase grouping and status labels for the depth chart."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping, Optional, Tuple


PHASES: Tuple[str, ...] = ("offense", "defense", "special-teams")


@dataclass(frozen=True)
class PositionGroup:
    name: str
    positions: Tuple[str, ...]
    phase: str


@dataclass(frozen=True)
class StatusLabel:
    code: str
    label: str
    full_label: str


_POSITION_GROUPS: Tuple[PositionGroup, ...] = (
    PositionGroup(name="Quarterbacks", positions=("QB",), phase="offense"),
    PositionGroup(name="Running Backs", positions=("RB",), phase="offense"),
    PositionGroup(name="Wide Receivers", positions=("Z", "X"), phase="offense"),
    PositionGroup(name="Tight Ends", positions=("TE",), phase="offense"),
    PositionGroup(name="Fullbacks", positions=("FB",), phase="offense"),
    PositionGroup(
        name="Offensive Line",
        positions=("LT", "LG", "OC", "RG", "RT"),
        phase="offense",
    ),
    PositionGroup(
        name="Defensive Line",
        positions=("LDE", "1-TECH", "3-TECH", "RDE"),
        phase="defense",
    ),
    PositionGroup(name="Linebackers", positions=("WLB", "MLB", "SLB"), phase="defense"),
    PositionGroup(
        name="Defensive Backs",
        positions=("LCB", "SS", "FS", "RCB"),
        phase="defense",
    ),
    PositionGroup(name="Special Teams", positions=("K", "P", "LS"), phase="special-teams"),
)

# Codes absent here display as themselves.
_DISPLAY_NAMES: Dict[str, str] = {
    "X": "WR",
    "Z": "WR",
    "OC": "C",
    "1-TECH": "LDT",
    "3-TECH": "RDT",
    "K": "PK",
}

_STATUS_LABELS: Tuple[StatusLabel, ...] = (
    StatusLabel(code="A", label="A", full_label="Active"),
    StatusLabel(code="P", label="PS", full_label="Practice Squad"),
    StatusLabel(code="I", label="IR", full_label="Injured Reserve"),
    StatusLabel(code="R", label="IR", full_label="Injured Reserve"),
)

_GROUP_BY_POSITION: Dict[str, PositionGroup] = {
    position: group for group in _POSITION_GROUPS for position in group.positions
}

_STATUS_BY_CODE: Dict[str, StatusLabel] = {status.code: status for status in _STATUS_LABELS}


def normalize_position(code: str) -> str:
    return (code or "").strip().upper()


def iter_groups(phase: Optional[str] = None) -> Iterable[PositionGroup]:
    """Return position groups in display order, optionally for a single phase."""

    if phase is None:
        return iter(_POSITION_GROUPS)
    if phase not in PHASES:
        raise KeyError(f"Unknown phase {phase!r}")
    return (group for group in _POSITION_GROUPS if group.phase == phase)


def iter_positions() -> Iterable[str]:
    """Return every position code in display order."""

    return (position for group in _POSITION_GROUPS for position in group.positions)


def is_known_position(code: str) -> bool:
    return normalize_position(code) in _GROUP_BY_POSITION


def get_position_group(code: str) -> PositionGroup:
    """Fetch the group for a position code, raising KeyError if missing."""

    key = normalize_position(code)
    if key not in _GROUP_BY_POSITION:
        raise KeyError(f"No position group configured for position={code!r}")
    return _GROUP_BY_POSITION[key]


def get_phase(code: str) -> str:
    return get_position_group(code).phase


def display_name(code: str) -> str:
    key = normalize_position(code)
    return _DISPLAY_NAMES.get(key, key)


def status_label(code: str) -> StatusLabel:
    key = (code or "").strip().upper()
    if key not in _STATUS_BY_CODE:
        raise KeyError(f"Unknown status code {code!r}")
    return _STATUS_BY_CODE[key]


def unique_status_labels() -> List[StatusLabel]:
    """One entry per distinct label; the first code listed for a label wins."""

    seen: set[str] = set()
    unique: List[StatusLabel] = []
    for status in _STATUS_LABELS:
        if status.label in seen:
            continue
        seen.add(status.label)
        unique.append(status)
    return unique


# Read-only view for callers that only need code -> phase.
POSITION_PHASES: Mapping[str, str] = {
    position: group.phase for position, group in _GROUP_BY_POSITION.items()
}
