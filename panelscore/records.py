"""Typed records for rows read from the database.

Every row handed to the aggregation and progress code passes through one of
these models first. Missing or out-of-range fields raise instead of falling
back to defaults, so a bad row is reported at the boundary rather than
quietly skewing a ranking.
"""
from __future__ import annotations

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from .errors import RecordValidationError


class CandidateRecord(BaseModel):
    """Subject being evaluated."""

    kind: Literal["candidate"] = "candidate"
    id: int
    name: str = Field(min_length=1)
    department: str | None = None
    position: str | None = None
    category: str | None = None
    description: str | None = None
    sort_order: int = 0
    is_active: bool = True

    model_config = ConfigDict(extra="forbid", frozen=True)


class EvaluatorRecord(BaseModel):
    """Person assigning scores. Credentials never leave the model layer."""

    kind: Literal["evaluator"] = "evaluator"
    id: int
    name: str = Field(min_length=1)
    email: str | None = None
    department: str | None = None
    is_active: bool = True

    model_config = ConfigDict(extra="forbid", frozen=True)


class ItemRecord(BaseModel):
    """Single scoring criterion."""

    kind: Literal["item"] = "item"
    id: int
    category_id: int
    item_code: str
    item_name: str = Field(min_length=1)
    description: str | None = None
    max_score: float = Field(ge=0, allow_inf_nan=False)
    weight: float = Field(ge=0, allow_inf_nan=False)
    sort_order: int = 0
    is_active: bool = True

    model_config = ConfigDict(extra="forbid", frozen=True)

    @property
    def weighted_max(self) -> float:
        return self.max_score * self.weight


class ScoreRecord(BaseModel):
    """One evaluator's judgment on one item for one candidate."""

    kind: Literal["score"] = "score"
    evaluator_id: int
    candidate_id: int
    item_id: int
    score: float = Field(ge=0, allow_inf_nan=False)
    max_score: float | None = Field(default=None, ge=0, allow_inf_nan=False)
    comments: str | None = None
    is_final: bool = False

    model_config = ConfigDict(extra="forbid", frozen=True)

    @model_validator(mode="after")
    def _score_within_max(self) -> "ScoreRecord":
        if self.max_score is not None and self.score > self.max_score:
            raise ValueError(f"score {self.score} exceeds max_score {self.max_score}")
        return self


class ProgressRecord(BaseModel):
    """Completion state of one evaluator's evaluation of one candidate."""

    kind: Literal["progress"] = "progress"
    evaluator_id: int
    candidate_id: int
    total_items: int = Field(ge=0)
    completed_items: int = Field(ge=0)
    progress_percentage: float = Field(ge=0, le=100, allow_inf_nan=False)
    is_submitted: bool = False
    submitted_at: datetime | None = None
    general_comment: str | None = None

    model_config = ConfigDict(extra="forbid", frozen=True)


def to_record(record_cls: type[BaseModel], row: Any) -> BaseModel:
    """Validate an ORM object or mapping into ``record_cls``.

    ORM objects are read attribute-by-attribute (only the record's declared
    fields); mappings must not carry unknown keys.
    """
    try:
        if isinstance(row, dict):
            return record_cls.model_validate(row)
        return record_cls.model_validate(row, from_attributes=True)
    except ValidationError as exc:
        kind = record_cls.model_fields["kind"].default
        row_id = row.get("id") if isinstance(row, dict) else getattr(row, "id", None)
        raise RecordValidationError(kind, row_id, exc.errors(include_url=False)) from exc


def to_records(record_cls: type[BaseModel], rows) -> list:
    return [to_record(record_cls, r) for r in rows]
