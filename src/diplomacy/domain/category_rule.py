from dataclasses import dataclass
from typing import Callable

from src.diplomacy.domain.country import CountryRef
from src.diplomacy.domain.diplomatic_edge import DiplomacyKind, DiplomaticEdge
from src.diplomacy.domain.relation_view import RelationRecord

Membership = Callable[[DiplomaticEdge, str], bool]
Extractor = Callable[[DiplomaticEdge, CountryRef], RelationRecord]


@dataclass(frozen=True)
class CategoryRule:
    """
    Declarative definition of one display category.
    `kind` lets the dispatch classifier bucket rules; `membership` must only
    accept edges of that kind.
    """
    key: str
    title: str
    kind: DiplomacyKind
    membership: Membership
    extract: Extractor

    def matches(self, edge: DiplomaticEdge, viewpoint_tag: str) -> bool:
        return edge.kind == self.kind and self.membership(edge, viewpoint_tag)
