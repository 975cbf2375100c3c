"""Conversion between gateway schemas, cached blobs and domain entities."""

from datetime import datetime
from typing import Any

from pydantic import ValidationError

from app.errors import InvalidLocalState
from app.models.election.entities import (
    Candidate,
    SnapshotSource,
    Student,
    SyncSnapshot,
    VotingConfig,
)
from gateway_client.election.schemas import (
    CandidateSchema,
    ElectionDataSchema,
    StudentSchema,
    VotesSchema,
    VotingConfigSchema,
)

# Cache keys, one blob each
STUDENTS_KEY = "students"
CANDIDATES_KEY = "candidates"
CONFIG_KEY = "config"
VOTES_KEY = "votes"
SNAPSHOT_KEYS = (STUDENTS_KEY, CANDIDATES_KEY, CONFIG_KEY, VOTES_KEY)


def config_from_schema(schema: VotingConfigSchema) -> VotingConfig:
    return VotingConfig(
        is_active=schema.is_active,
        is_ended=schema.is_ended,
        start_time=schema.start_time,
        end_time=schema.end_time,
    )


def snapshot_from_payload(
    payload: ElectionDataSchema,
    synced_at: datetime | None = None,
    source: SnapshotSource = SnapshotSource.REMOTE,
) -> SyncSnapshot:
    """Build a snapshot from a validated full read."""
    return SyncSnapshot(
        students=tuple(
            Student(
                student_id=s.student_id,
                name=s.name,
                cohort=s.cohort,
                eligible=s.eligible,
            )
            for s in payload.students
        ),
        candidates=tuple(
            Candidate(
                candidate_id=c.candidate_id,
                name=c.name,
                code=c.code,
                photo_url=c.photo_url,
                platform=c.platform,
            )
            for c in payload.candidates
        ),
        config=config_from_schema(payload.config),
        tally=dict(payload.votes.tally),
        voted=frozenset(payload.votes.voted_students),
        synced_at=synced_at,
        source=source,
    )


def snapshot_to_blobs(snapshot: SyncSnapshot) -> dict[str, Any]:
    """Wire-format JSON blobs, one per cache key."""
    config = snapshot.config
    return {
        STUDENTS_KEY: [
            StudentSchema(
                student_id=s.student_id,
                name=s.name,
                cohort=s.cohort,
                eligible=s.eligible,
            ).model_dump(by_alias=True, mode="json")
            for s in snapshot.students
        ],
        CANDIDATES_KEY: [
            CandidateSchema(
                candidate_id=c.candidate_id,
                name=c.name,
                code=c.code,
                photo_url=c.photo_url,
                platform=c.platform,
            ).model_dump(by_alias=True, mode="json")
            for c in snapshot.candidates
        ],
        CONFIG_KEY: VotingConfigSchema(
            is_active=config.is_active,
            is_ended=config.is_ended,
            start_time=config.start_time,
            end_time=config.end_time,
        ).model_dump(by_alias=True, mode="json"),
        VOTES_KEY: VotesSchema(
            tally=snapshot.tally,
            voted_students=sorted(snapshot.voted),
        ).model_dump(by_alias=True, mode="json"),
    }


def snapshot_from_blobs(blobs: dict[str, Any], synced_at: datetime | None = None) -> SyncSnapshot:
    """Rebuild a cached snapshot; unreadable blobs raise InvalidLocalState."""
    try:
        payload = ElectionDataSchema.model_validate({key: blobs.get(key) for key in SNAPSHOT_KEYS})
    except ValidationError as e:
        raise InvalidLocalState(f"Cached snapshot failed validation ({e.error_count()} errors)") from e
    return snapshot_from_payload(payload, synced_at=synced_at, source=SnapshotSource.CACHE)
