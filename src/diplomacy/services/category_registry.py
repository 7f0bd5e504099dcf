from typing import Dict, FrozenSet, Iterable, List, Optional, Tuple

from src.diplomacy.domain.category_rule import CategoryRule, Membership
from src.diplomacy.domain.country import CountryRef
from src.diplomacy.domain.diplomatic_edge import (
    COLONIAL_SUBJECT_TYPES,
    DiplomacyKind,
    DiplomaticEdge,
    SubjectType,
)
from src.diplomacy.domain.relation_view import RelationRecord

OVERLORD_SUBJECT_TYPES: FrozenSet[SubjectType] = frozenset({
    SubjectType.VASSAL,
    SubjectType.PERSONAL_UNION,
    SubjectType.CORE_EYALET,
    SubjectType.EYALET,
    SubjectType.APPANAGE,
    SubjectType.TRIBUTARY_STATE,
}) | COLONIAL_SUBJECT_TYPES


# Membership predicates

def either_side(edge: DiplomaticEdge, viewpoint_tag: str) -> bool:
    return edge.is_symmetric and edge.involves(viewpoint_tag)


def viewpoint_first(edge: DiplomaticEdge, viewpoint_tag: str) -> bool:
    return edge.first.tag == viewpoint_tag


def viewpoint_second(edge: DiplomaticEdge, viewpoint_tag: str) -> bool:
    return edge.second.tag == viewpoint_tag


def subject_of(side: Membership, subject_types: Iterable[SubjectType]) -> Membership:
    allowed = frozenset(subject_types)

    def membership(edge: DiplomaticEdge, viewpoint_tag: str) -> bool:
        return side(edge, viewpoint_tag) and edge.subject in allowed

    return membership


def relation_from_edge(edge: DiplomaticEdge, other: CountryRef) -> RelationRecord:
    """
    Copies every payload field onto the record; the renderer picks what to show.
    Tag and name always come from the counterpart side.
    """
    terms = edge.data
    return RelationRecord(
        tag=other.tag,
        name=other.name,
        start_date=terms.start_date,
        end_date=terms.end_date,
        amount=terms.amount,
        total=terms.total,
        pu_inheritance_value=terms.pu_inheritance_value,
        subject_type=terms.subject_type,
    )


def _rule(key: str, title: str, kind: DiplomacyKind, membership: Membership, extract=relation_from_edge) -> CategoryRule:
    return CategoryRule(key=key, title=title, kind=kind, membership=membership, extract=extract)


_DEP = DiplomacyKind.DEPENDENCY

DEFAULT_CATEGORY_RULES: Tuple[CategoryRule, ...] = (
    _rule("allies", "Allies", DiplomacyKind.ALLIANCE, either_side),
    _rule("royal_marriages", "Royal Marriages", DiplomacyKind.ROYAL_MARRIAGE, either_side),
    _rule("overlord", "Overlord", _DEP, subject_of(viewpoint_second, OVERLORD_SUBJECT_TYPES)),
    _rule("vassals", "Vassals", _DEP, subject_of(viewpoint_first, [SubjectType.VASSAL])),
    _rule("appanages", "Appanage", _DEP, subject_of(viewpoint_first, [SubjectType.APPANAGE])),
    _rule("core_eyalets", "Core Eyalets", _DEP, subject_of(viewpoint_first, [SubjectType.CORE_EYALET])),
    _rule("eyalets", "Eyalets", _DEP, subject_of(viewpoint_first, [SubjectType.EYALET])),
    _rule("tributaries", "Tributaries", _DEP, subject_of(viewpoint_first, [SubjectType.TRIBUTARY_STATE])),
    _rule("colonies", "Colonies", _DEP, subject_of(viewpoint_first, COLONIAL_SUBJECT_TYPES)),
    _rule("junior_partners", "Junior Partners", DiplomacyKind.JUNIOR_PARTNER, either_side),
    _rule("warning", "Warning", DiplomacyKind.WARNING, viewpoint_first),
    _rule("warned_by", "Warned by", DiplomacyKind.WARNING, viewpoint_second),
    _rule("subsidizing", "Subsidizing", DiplomacyKind.SUBSIDY, viewpoint_first),
    _rule("subsidized_by", "Subsidized by", DiplomacyKind.SUBSIDY, viewpoint_second),
    _rule("reparations_receiving", "Reparations (receiving)", DiplomacyKind.REPARATIONS, viewpoint_second),
    _rule("reparations_giving", "Reparations (giving)", DiplomacyKind.REPARATIONS, viewpoint_first),
    _rule("trade_power_receiving", "Trade Power (receiving)", DiplomacyKind.TRANSFER_TRADE, viewpoint_second),
    _rule("trade_power_giving", "Trade Power (giving)", DiplomacyKind.TRANSFER_TRADE, viewpoint_first),
    _rule("steer_trade_receiving", "Steer Trade (receiving)", DiplomacyKind.STEER_TRADE, viewpoint_second),
    _rule("steer_trade_giving", "Steer Trade (giving)", DiplomacyKind.STEER_TRADE, viewpoint_first),
)


class CategoryRegistry:
    """
    Ordered, closed set of category rules.
    Declaration order is display order.
    """

    def __init__(self, rules: Optional[Iterable[CategoryRule]] = None):
        self._rules: Tuple[CategoryRule, ...] = tuple(rules) if rules is not None else DEFAULT_CATEGORY_RULES
        keys = [r.key for r in self._rules]
        if len(set(keys)) != len(keys):
            raise ValueError("Category keys must be unique")
        self._by_kind: Dict[DiplomacyKind, List[Tuple[int, CategoryRule]]] = {}
        for index, rule in enumerate(self._rules):
            self._by_kind.setdefault(rule.kind, []).append((index, rule))

    @property
    def rules(self) -> Tuple[CategoryRule, ...]:
        return self._rules

    def rules_for_kind(self, kind: DiplomacyKind) -> List[Tuple[int, CategoryRule]]:
        return self._by_kind.get(kind, [])

    def get(self, key: str) -> Optional[CategoryRule]:
        for rule in self._rules:
            if rule.key == key:
                return rule
        return None
