from src.diplomacy.domain.country import CountryRef
from src.diplomacy.domain.diplomatic_edge import DiplomaticEdge
from src.diplomacy.domain.exceptions import PerspectiveIntegrityError
from src.diplomacy.interfaces.perspective_normalizer import PerspectiveNormalizer


class StrictPerspectiveNormalizer(PerspectiveNormalizer):
    """
    Returns the other side of an edge.
    Never yields the viewpoint itself: self-loops and foreign edges raise.
    """

    def normalize(self, edge: DiplomaticEdge, viewpoint_tag: str) -> CountryRef:
        on_first = edge.first.tag == viewpoint_tag
        on_second = edge.second.tag == viewpoint_tag
        if on_first == on_second:
            raise PerspectiveIntegrityError(edge, viewpoint_tag)
        return edge.second if on_first else edge.first
