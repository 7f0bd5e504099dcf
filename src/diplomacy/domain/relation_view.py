from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class RelationRecord:
    """
    A counterpart relationship as seen from the viewpoint country.
    Fields the edge payload does not carry stay None.
    """
    tag: str
    name: str
    flag: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    amount: Optional[float] = None
    total: Optional[float] = None
    pu_inheritance_value: Optional[int] = None
    subject_type: Optional[str] = None
    subject_label: Optional[str] = None

    def with_display(self, name: str, flag: str, subject_label: Optional[str] = None) -> "RelationRecord":
        return replace(self, name=name, flag=flag, subject_label=subject_label)

    def to_payload(self) -> Dict[str, Any]:
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not None
        }


@dataclass(frozen=True)
class CategoryView:
    key: str
    title: str
    relations: Tuple[RelationRecord, ...] = ()

    def to_payload(self) -> Dict[str, Any]:
        return {
            "key": self.key,
            "title": self.title,
            "relations": [r.to_payload() for r in self.relations],
        }
