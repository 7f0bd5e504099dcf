import pytest

from src.diplomacy.domain.country import CountryRef
from src.diplomacy.domain.diplomatic_edge import (
    DiplomacyKind,
    DiplomaticEdge,
    EdgeTerms,
    SubjectType,
)
from src.diplomacy.services.category_registry import (
    DEFAULT_CATEGORY_RULES,
    CategoryRegistry,
    either_side,
    relation_from_edge,
)

EXPECTED_ORDER = [
    "Allies",
    "Royal Marriages",
    "Overlord",
    "Vassals",
    "Appanage",
    "Core Eyalets",
    "Eyalets",
    "Tributaries",
    "Colonies",
    "Junior Partners",
    "Warning",
    "Warned by",
    "Subsidizing",
    "Subsidized by",
    "Reparations (receiving)",
    "Reparations (giving)",
    "Trade Power (receiving)",
    "Trade Power (giving)",
    "Steer Trade (receiving)",
    "Steer Trade (giving)",
]

# Category an overlord sees for each subject type; None means no row.
SUBJECT_CATEGORY_FOR_OVERLORD = {
    SubjectType.VASSAL: "vassals",
    SubjectType.PERSONAL_UNION: None,
    SubjectType.CORE_EYALET: "core_eyalets",
    SubjectType.EYALET: "eyalets",
    SubjectType.APPANAGE: "appanages",
    SubjectType.TRIBUTARY_STATE: "tributaries",
    SubjectType.COLONY: "colonies",
    SubjectType.PRIVATE_ENTERPRISE: "colonies",
    SubjectType.SELF_GOVERNING_COLONY: "colonies",
    SubjectType.CROWN_COLONY: "colonies",
}


def dependency(subject_type: str) -> DiplomaticEdge:
    return DiplomaticEdge(
        kind=DiplomacyKind.DEPENDENCY,
        first=CountryRef("SWE", "Sweden"),
        second=CountryRef("DNK", "Denmark"),
        data=EdgeTerms(subject_type=subject_type),
    )


def matching_keys(edge: DiplomaticEdge, viewpoint: str):
    return [r.key for r in CategoryRegistry().rules if r.matches(edge, viewpoint)]


def test_declaration_order_is_display_order():
    assert [r.title for r in CategoryRegistry().rules] == EXPECTED_ORDER


def test_subject_type_table_covers_closed_set():
    assert set(SUBJECT_CATEGORY_FOR_OVERLORD) == set(SubjectType)


@pytest.mark.parametrize("subject_type", list(SubjectType))
def test_dependency_from_overlord_side(subject_type):
    expected = SUBJECT_CATEGORY_FOR_OVERLORD[subject_type]
    keys = matching_keys(dependency(subject_type.value), "SWE")

    assert keys == ([expected] if expected else [])


@pytest.mark.parametrize("subject_type", list(SubjectType))
def test_dependency_from_subject_side_is_overlord(subject_type):
    assert matching_keys(dependency(subject_type.value), "DNK") == ["overlord"]


@pytest.mark.parametrize("raw", ["march", "daimyo_vassal", "", "VASSAL"])
def test_unknown_subject_type_matches_nothing(raw):
    edge = dependency(raw)

    assert matching_keys(edge, "SWE") == []
    assert matching_keys(edge, "DNK") == []


def test_dependency_without_subject_type_matches_nothing():
    edge = DiplomaticEdge(
        kind=DiplomacyKind.DEPENDENCY,
        first=CountryRef("SWE", "Sweden"),
        second=CountryRef("DNK", "Denmark"),
    )

    assert matching_keys(edge, "SWE") == []
    assert matching_keys(edge, "DNK") == []


@pytest.mark.parametrize("kind", [k for k in DiplomacyKind if k != DiplomacyKind.DEPENDENCY])
def test_each_side_matches_at_most_one_rule(kind):
    edge = DiplomaticEdge(kind=kind, first=CountryRef("ENG", "England"), second=CountryRef("POR", "Portugal"))

    assert len(matching_keys(edge, "ENG")) == 1
    assert len(matching_keys(edge, "POR")) == 1
    assert matching_keys(edge, "CAS") == []


def test_rules_for_kind_preserve_indices():
    registry = CategoryRegistry()
    indices = [i for i, _ in registry.rules_for_kind(DiplomacyKind.DEPENDENCY)]

    assert indices == [2, 3, 4, 5, 6, 7, 8]
    for index, rule in registry.rules_for_kind(DiplomacyKind.WARNING):
        assert registry.rules[index] is rule


def test_get_by_key():
    registry = CategoryRegistry()

    assert registry.get("subsidized_by").title == "Subsidized by"
    assert registry.get("missing") is None


def test_duplicate_keys_rejected():
    rule = DEFAULT_CATEGORY_RULES[0]

    with pytest.raises(ValueError):
        CategoryRegistry([rule, rule])


def test_extractor_keeps_counterpart_tag_and_dates():
    edge = DiplomaticEdge(
        kind=DiplomacyKind.ALLIANCE,
        first=CountryRef("FRA", "France"),
        second=CountryRef("ENG", "England"),
        data=EdgeTerms(start_date="1444.11.11", end_date="1460.1.1"),
    )

    record = relation_from_edge(edge, edge.second)

    assert record.tag == "ENG"
    assert record.start_date == "1444.11.11"
    assert record.end_date == "1460.1.1"


@pytest.mark.parametrize("kind", [DiplomacyKind.ALLIANCE, DiplomacyKind.ROYAL_MARRIAGE, DiplomacyKind.JUNIOR_PARTNER])
def test_either_side_only_for_symmetric_kinds(kind):
    edge = DiplomaticEdge(kind=kind, first=CountryRef("CAS", "Castile"), second=CountryRef("ARA", "Aragon"))
    directed = DiplomaticEdge(kind=DiplomacyKind.WARNING, first=edge.first, second=edge.second)

    assert either_side(edge, "ARA")
    assert not either_side(directed, "ARA")
