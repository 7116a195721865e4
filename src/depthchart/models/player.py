"""Canonical player model shared across storage, engine and API layers."""

from __future__ import annotations

from typing import Any, Mapping

from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel
from pydantic.config import ConfigDict


def _field_key(value: str) -> str:
    return value.replace("_", "").replace("-", "").replace(" ", "").lower()


class Player(BaseModel):
    """One roster entry on the depth chart."""

    id: str = Field(..., min_length=1)
    first_name: str = ""
    last_name: str = ""
    jersey: int = Field(default=0, ge=0)
    position: str = Field(..., min_length=1)
    order: int = Field(..., ge=1)
    status: str = "A"

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> Any:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("position", "status", mode="before")
    @classmethod
    def _normalize_code(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().upper()
        return value

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> "Player":
        """Build a player from a record whose keys may use any casing.

        ``FirstName``, ``firstname`` and ``first_name`` all resolve to the same
        field. Unknown keys are ignored.
        """

        lookup = {_field_key(name): name for name in cls.model_fields}
        payload: dict[str, Any] = {}
        for key, value in raw.items():
            name = lookup.get(_field_key(str(key)))
            if name is None:
                continue
            if isinstance(value, str):
                value = value.strip()
                if value == "" and name not in {"id", "position", "order"}:
                    continue
            payload[name] = value
        return cls.model_validate(payload)

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)
