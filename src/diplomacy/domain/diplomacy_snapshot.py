from dataclasses import dataclass, field
from typing import Iterable, Optional, Tuple
from uuid import UUID, uuid4

from src.diplomacy.domain.country import CountryDirectory
from src.diplomacy.domain.diplomatic_edge import DiplomaticEdge


@dataclass(frozen=True)
class DiplomacySnapshot:
    """
    Immutable edge store for one loaded save.
    `snapshot_id` identifies the edge set for memoization.
    """
    edges: Tuple[DiplomaticEdge, ...] = ()
    directory: CountryDirectory = field(default_factory=CountryDirectory)
    snapshot_id: UUID = field(default_factory=uuid4)

    @staticmethod
    def build(
        edges: Iterable[DiplomaticEdge],
        directory: Optional[CountryDirectory] = None,
    ) -> "DiplomacySnapshot":
        return DiplomacySnapshot(
            edges=tuple(edges),
            directory=directory or CountryDirectory(),
        )
