"""
Saved scenario record: a name, a timestamp and a full input snapshot.

Storage is the caller's business (browser storage, a JSON file, a database
row); this module only defines the record and its JSON form.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator

from core.schema import PlannerInput
from inputs.loader import load_planner_input


def _new_id() -> str:
    return uuid.uuid4().hex


def _now() -> datetime:
    return datetime.now(timezone.utc)


class Scenario(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=_new_id)
    name: str = Field(min_length=1)
    created_at: datetime = Field(default_factory=_now)
    inputs: PlannerInput

    @field_validator("inputs", mode="before")
    @classmethod
    def _coerce_inputs(cls, value: Any) -> Any:
        # plain mappings may use the form's camelCase keys
        if isinstance(value, dict):
            return load_planner_input(value)
        return value

    @field_validator("created_at", mode="before")
    @classmethod
    def _coerce_epoch_millis(cls, value: Any) -> Any:
        # the web form stores Date.now() milliseconds
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return datetime.fromtimestamp(value / 1000.0, tz=timezone.utc)
        return value


_SCENARIO_LIST = TypeAdapter(List[Scenario])


def scenarios_to_json(scenarios: List[Scenario]) -> str:
    return _SCENARIO_LIST.dump_json(scenarios).decode("utf-8")


def scenarios_from_json(payload: str) -> List[Scenario]:
    """Parse a stored list; raises pydantic.ValidationError on a malformed payload."""
    return _SCENARIO_LIST.validate_json(payload)
