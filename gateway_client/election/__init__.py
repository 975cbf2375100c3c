"""Election gateway client."""

from gateway_client.election.client import ElectionClient
from gateway_client.election.schemas import (
    CandidateSchema,
    ElectionDataSchema,
    StudentSchema,
    VotesSchema,
    VotingConfigSchema,
)

__all__ = [
    "ElectionClient",
    "StudentSchema",
    "CandidateSchema",
    "VotingConfigSchema",
    "VotesSchema",
    "ElectionDataSchema",
]
