"""Election gateway schemas."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator


def _as_text(value):
    """Sheet cells holding ids come back as numbers; ids are compared as text."""
    if value is None:
        return value
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value).strip()


class StudentSchema(BaseModel):
    """Roster entry (estudiante)."""

    student_id: str = Field(alias="carnet")
    name: str = Field(alias="nombre")
    cohort: str = Field(alias="curso", default="")
    eligible: bool = Field(alias="habilitado", default=True)

    @field_validator("student_id", "cohort", mode="before")
    @classmethod
    def normalize_text(cls, value):
        return _as_text(value)

    class Config:
        populate_by_name = True


class CandidateSchema(BaseModel):
    """Candidate (candidato)."""

    candidate_id: int = Field(alias="id")
    name: str = Field(alias="nombre")
    code: str = Field(alias="sigla", default="")
    photo_url: str = Field(alias="foto", default="")
    platform: str = Field(alias="propuestas", default="")

    class Config:
        populate_by_name = True


class VotingConfigSchema(BaseModel):
    """Voting window configuration."""

    is_active: bool = Field(alias="isActive", default=False)
    is_ended: bool = Field(alias="isEnded", default=False)
    start_time: datetime | None = Field(alias="startTime", default=None)
    end_time: datetime | None = Field(alias="endTime", default=None)

    @field_validator("start_time", "end_time", mode="before")
    @classmethod
    def blank_is_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    class Config:
        populate_by_name = True


class VotesSchema(BaseModel):
    """Aggregated tally plus the ids of students who already voted."""

    tally: dict[int, int] = Field(alias="votes", default_factory=dict)
    voted_students: list[str] = Field(alias="votedStudents", default_factory=list)

    @field_validator("voted_students", mode="before")
    @classmethod
    def ids_as_text(cls, value):
        if value is None:
            return []
        return [_as_text(v) for v in value]

    class Config:
        populate_by_name = True


class ElectionDataSchema(BaseModel):
    """Full read: roster, candidates, config and votes."""

    students: list[StudentSchema]
    candidates: list[CandidateSchema]
    config: VotingConfigSchema
    votes: VotesSchema = Field(default_factory=VotesSchema)

    @field_validator("votes", mode="before")
    @classmethod
    def missing_votes(cls, value):
        return {} if value is None else value
