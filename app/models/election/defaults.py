"""Built-in election data, shown when neither the gateway nor the cache can provide any."""

from app.models.election.entities import (
    Candidate,
    SnapshotSource,
    Student,
    SyncSnapshot,
    VotingConfig,
)

DEFAULT_STUDENTS = (
    Student("2023001", "Juan Pérez", "11-A"),
    Student("2023002", "María García", "11-B"),
    Student("2023003", "Carlos López", "10-A"),
    Student("2023004", "Ana Martínez", "10-B"),
    Student("2023005", "Luis Rodríguez", "9-A"),
)

DEFAULT_CANDIDATES = (
    Candidate(
        1,
        "Sofía Hernández",
        "SH",
        "https://via.placeholder.com/150/667eea/ffffff?text=SH",
        "Mejores espacios recreativos y deportivos",
    ),
    Candidate(
        2,
        "Diego Morales",
        "DM",
        "https://via.placeholder.com/150/764ba2/ffffff?text=DM",
        "Tecnología en aulas y laboratorios modernos",
    ),
    Candidate(
        3,
        "Camila Torres",
        "CT",
        "https://via.placeholder.com/150/51cf66/ffffff?text=CT",
        "Actividades culturales y artísticas",
    ),
)


def default_snapshot() -> SyncSnapshot:
    """Fixed roster and candidates with an inactive window and no votes."""
    return SyncSnapshot(
        students=DEFAULT_STUDENTS,
        candidates=DEFAULT_CANDIDATES,
        config=VotingConfig(),
        tally={},
        voted=frozenset(),
        source=SnapshotSource.DEFAULT,
    )
