import pytest

from src.diplomacy.domain.country import CountryRef
from src.diplomacy.domain.diplomatic_edge import DiplomacyKind, DiplomaticEdge, EdgeTerms
from src.diplomacy.domain.exceptions import PerspectiveIntegrityError
from src.diplomacy.services.perspective_normalizer import StrictPerspectiveNormalizer


def create_edge(kind: DiplomacyKind, first: str, second: str) -> DiplomaticEdge:
    return DiplomaticEdge(
        kind=kind,
        first=CountryRef(first, f"{first} name"),
        second=CountryRef(second, f"{second} name"),
        data=EdgeTerms(),
    )


@pytest.mark.parametrize("kind", list(DiplomacyKind))
def test_returns_opposite_side_for_every_kind(kind):
    normalizer = StrictPerspectiveNormalizer()
    edge = create_edge(kind, "SWE", "DNK")

    from_first = normalizer.normalize(edge, "SWE")
    from_second = normalizer.normalize(edge, "DNK")

    assert from_first == CountryRef("DNK", "DNK name")
    assert from_second == CountryRef("SWE", "SWE name")
    assert from_first.tag != "SWE"
    assert from_second.tag != "DNK"


def test_foreign_viewpoint_raises():
    normalizer = StrictPerspectiveNormalizer()
    edge = create_edge(DiplomacyKind.ALLIANCE, "FRA", "ENG")

    with pytest.raises(PerspectiveIntegrityError) as info:
        normalizer.normalize(edge, "CAS")

    assert info.value.viewpoint_tag == "CAS"
    assert info.value.edge is edge


def test_self_referential_edge_raises():
    normalizer = StrictPerspectiveNormalizer()
    edge = create_edge(DiplomacyKind.ALLIANCE, "FRA", "FRA")

    with pytest.raises(PerspectiveIntegrityError):
        normalizer.normalize(edge, "FRA")


def test_determinism():
    normalizer = StrictPerspectiveNormalizer()
    edge = create_edge(DiplomacyKind.SUBSIDY, "ENG", "POR")

    assert normalizer.normalize(edge, "POR") == normalizer.normalize(edge, "POR")
