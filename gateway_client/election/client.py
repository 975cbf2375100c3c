"""Election gateway client."""

import asyncio
from datetime import datetime
from typing import Any

from pydantic import BaseModel, TypeAdapter, ValidationError

from gateway_client.base import BaseClient
from gateway_client.errors import GatewayApplicationError
from gateway_client.election.schemas import (
    CandidateSchema,
    ElectionDataSchema,
    StudentSchema,
    VotesSchema,
    VotingConfigSchema,
)

_students = TypeAdapter(list[StudentSchema])
_candidates = TypeAdapter(list[CandidateSchema])


def _parse(schema: type[BaseModel] | TypeAdapter, data: Any, action: str):
    """Validate a payload, reporting shape problems as gateway errors."""
    try:
        if isinstance(schema, TypeAdapter):
            return schema.validate_python(data)
        return schema.model_validate(data)
    except ValidationError as e:
        raise GatewayApplicationError(f"{action}: invalid data structure ({e.error_count()} errors)") from e


class ElectionClient(BaseClient):
    """Client for the spreadsheet-backed election gateway actions."""

    async def both(self) -> ElectionDataSchema:
        """action=getBoth - students, candidates, config and votes in one call."""
        return _parse(ElectionDataSchema, await self._call("getBoth"), "getBoth")

    async def students(self) -> list[StudentSchema]:
        """action=getStudents - voter roster."""
        return _parse(_students, await self._call("getStudents"), "getStudents")

    async def candidates(self) -> list[CandidateSchema]:
        """action=getCandidates - candidate list."""
        return _parse(_candidates, await self._call("getCandidates"), "getCandidates")

    async def config(self) -> VotingConfigSchema:
        """action=getConfig - voting window."""
        return _parse(VotingConfigSchema, await self._call("getConfig"), "getConfig")

    async def votes(self) -> VotesSchema:
        """action=getVotes - tally and voted students."""
        return _parse(VotesSchema, await self._call("getVotes") or {}, "getVotes")

    async def all_parts(self) -> ElectionDataSchema:
        """Fetch the four collections concurrently; fails if any of them fails."""
        students, candidates, config, votes = await asyncio.gather(
            self.students(),
            self.candidates(),
            self.config(),
            self.votes(),
        )
        return ElectionDataSchema(students=students, candidates=candidates, config=config, votes=votes)

    async def set_config(
        self,
        is_active: bool | None = None,
        start_time: datetime | str | None = None,
        end_time: datetime | str | None = None,
    ) -> VotingConfigSchema:
        """action=setConfig - partial update, returns the canonical config."""
        data = await self._call(
            "setConfig",
            {"isActive": is_active, "startTime": start_time, "endTime": end_time},
            retry_read=False,
        )
        return _parse(VotingConfigSchema, data, "setConfig")

    async def add_vote(self, student_id: str, candidate_id: int) -> dict:
        """action=addVote - register one vote; the gateway rejects duplicates."""
        data = await self._call(
            "addVote",
            {"studentId": student_id, "candidateId": candidate_id},
            retry_read=False,
        )
        return data if isinstance(data, dict) else {"result": data}

    async def clear_votes(self) -> dict:
        """action=clearVotes - reset tally and voted students."""
        data = await self._call("clearVotes", retry_read=False)
        return data if isinstance(data, dict) else {"result": data}
