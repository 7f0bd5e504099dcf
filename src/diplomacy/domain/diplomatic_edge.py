import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional

from src.diplomacy.domain.country import CountryRef
from src.diplomacy.domain.exceptions import InvalidDiplomacyPayload

logger = logging.getLogger(__name__)


class DiplomacyKind(Enum):
    DEPENDENCY = "Dependency"
    ALLIANCE = "Alliance"
    ROYAL_MARRIAGE = "RoyalMarriage"
    WARNING = "Warning"
    SUBSIDY = "Subsidy"
    REPARATIONS = "Reparations"
    TRANSFER_TRADE = "TransferTrade"
    STEER_TRADE = "SteerTrade"
    JUNIOR_PARTNER = "JuniorPartner"


SYMMETRIC_KINDS = frozenset({
    DiplomacyKind.ALLIANCE,
    DiplomacyKind.ROYAL_MARRIAGE,
    DiplomacyKind.JUNIOR_PARTNER,
})


class SubjectType(Enum):
    VASSAL = "vassal"
    PERSONAL_UNION = "personal_union"
    CORE_EYALET = "core_eyalet"
    EYALET = "eyalet"
    APPANAGE = "appanage"
    TRIBUTARY_STATE = "tributary_state"
    COLONY = "colony"
    PRIVATE_ENTERPRISE = "private_enterprise"
    SELF_GOVERNING_COLONY = "self_governing_colony"
    CROWN_COLONY = "crown_colony"


COLONIAL_SUBJECT_TYPES = frozenset({
    SubjectType.COLONY,
    SubjectType.PRIVATE_ENTERPRISE,
    SubjectType.SELF_GOVERNING_COLONY,
    SubjectType.CROWN_COLONY,
})


def parse_subject_type(raw: Optional[str]) -> Optional[SubjectType]:
    if raw is None:
        return None
    try:
        return SubjectType(str(raw))
    except ValueError:
        return None


@dataclass(frozen=True)
class EdgeTerms:
    """
    Kind-specific payload of an edge. Fields a kind does not carry stay None.
    Dates are kept in the save's own notation (e.g. "1444.11.11").
    """
    subject_type: Optional[str] = None
    amount: Optional[float] = None
    total: Optional[float] = None
    pu_inheritance_value: Optional[int] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class DiplomaticEdge:
    """
    A diplomatic relation between two countries.
    For directed kinds `first` is the initiating or superior party.
    """
    kind: DiplomacyKind
    first: CountryRef
    second: CountryRef
    data: EdgeTerms = field(default_factory=EdgeTerms)

    @property
    def is_symmetric(self) -> bool:
        return self.kind in SYMMETRIC_KINDS

    @property
    def subject(self) -> Optional[SubjectType]:
        if self.kind != DiplomacyKind.DEPENDENCY:
            return None
        return parse_subject_type(self.data.subject_type)

    def involves(self, tag: str) -> bool:
        return self.first.tag == tag or self.second.tag == tag


_TERM_KEYS = ("subject_type", "amount", "total", "pu_inheritance_value", "start_date", "end_date")


def _country_from_payload(raw: Any, side: str) -> CountryRef:
    if isinstance(raw, str) and raw:
        return CountryRef(tag=raw, name=raw)
    if not isinstance(raw, dict) or not raw.get("tag"):
        raise InvalidDiplomacyPayload(f"Missing country reference on side {side!r}")
    tag = str(raw["tag"])
    return CountryRef(tag=tag, name=str(raw.get("name") or tag))


def _optional_float(value: Any) -> Optional[float]:
    return float(value) if value is not None else None


def _optional_str(value: Any) -> Optional[str]:
    return str(value) if value is not None else None


def terms_from_payload(raw: Dict[str, Any]) -> EdgeTerms:
    inheritance = raw.get("pu_inheritance_value")
    try:
        return EdgeTerms(
            subject_type=_optional_str(raw.get("subject_type")),
            amount=_optional_float(raw.get("amount")),
            total=_optional_float(raw.get("total")),
            pu_inheritance_value=int(inheritance) if inheritance is not None else None,
            start_date=_optional_str(raw.get("start_date")),
            end_date=_optional_str(raw.get("end_date")),
            extra={k: v for k, v in raw.items() if k not in _TERM_KEYS},
        )
    except (TypeError, ValueError) as exc:
        raise InvalidDiplomacyPayload(f"Malformed edge terms: {exc}") from exc


def edge_from_payload(payload: Dict[str, Any]) -> DiplomaticEdge:
    """
    Converts one parser row into an edge. Accepts both the nested
    `{"kind", "first", "second", "data": {...}}` shape and rows where the
    data fields were already merged into the top level.
    """
    raw_kind = payload.get("kind")
    try:
        kind = DiplomacyKind(str(raw_kind))
    except ValueError as exc:
        raise InvalidDiplomacyPayload(f"Unknown diplomacy kind {raw_kind!r}") from exc

    first = _country_from_payload(payload.get("first"), "first")
    second = _country_from_payload(payload.get("second"), "second")

    merged: Dict[str, Any] = {
        k: v for k, v in payload.items() if k not in ("kind", "first", "second", "data")
    }
    nested = payload.get("data")
    if isinstance(nested, dict):
        merged.update(nested)

    return DiplomaticEdge(kind=kind, first=first, second=second, data=terms_from_payload(merged))


def edges_from_payload(rows: Iterable[Dict[str, Any]]) -> List[DiplomaticEdge]:
    edges: List[DiplomaticEdge] = []
    for index, row in enumerate(rows):
        try:
            edges.append(edge_from_payload(dict(row)))
        except (InvalidDiplomacyPayload, TypeError, ValueError) as exc:
            logger.warning("Skipping diplomacy row %d: %s", index, exc)
    return edges
