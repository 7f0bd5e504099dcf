from abc import ABC, abstractmethod

from src.diplomacy.domain.country import CountryRef
from src.diplomacy.domain.diplomatic_edge import DiplomaticEdge


class PerspectiveNormalizer(ABC):
    """
    Interface for resolving the counterpart of an edge from a viewpoint.
    """
    @abstractmethod
    def normalize(self, edge: DiplomaticEdge, viewpoint_tag: str) -> CountryRef:
        """
        Returns the CountryRef on the non-viewpoint side.
        Raises PerspectiveIntegrityError if the viewpoint matches neither or both sides.
        """
        pass
