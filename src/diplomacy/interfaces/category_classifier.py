from abc import ABC, abstractmethod
from typing import Iterable, List

from src.diplomacy.domain.diplomatic_edge import DiplomaticEdge
from src.diplomacy.domain.relation_view import CategoryView


class CategoryClassifier(ABC):
    """
    Interface for bucketing edges into viewpoint-specific categories.
    Must be deterministic and must not mutate the edges.
    """
    @abstractmethod
    def classify(self, edges: Iterable[DiplomaticEdge], viewpoint_tag: str) -> List[CategoryView]:
        """
        Returns non-empty categories in declaration order.
        Relation names come from the edges; display metadata is joined later.
        """
        pass
