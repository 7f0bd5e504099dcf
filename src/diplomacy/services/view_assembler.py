from typing import List, Optional

from src.diplomacy.domain.country import CountryDirectory
from src.diplomacy.domain.relation_view import CategoryView, RelationRecord
from src.diplomacy.interfaces.view_assembler import ViewAssembler

_COLONY_SUFFIX = "_colony"


def subject_label(subject_type: Optional[str]) -> Optional[str]:
    """
    Display label for a subject type: "crown_colony" -> "crown".
    Cosmetic only; classification always works on the raw value.
    """
    if subject_type is None:
        return None
    if subject_type.endswith(_COLONY_SUFFIX):
        return subject_type[: -len(_COLONY_SUFFIX)]
    return subject_type


class DirectoryViewAssembler(ViewAssembler):
    """
    Joins relations with directory metadata.
    Unknown tags fall back to the raw tag for both name and flag.
    """

    def assemble(self, categories: List[CategoryView], directory: CountryDirectory) -> List[CategoryView]:
        views: List[CategoryView] = []
        for category in categories:
            relations = tuple(self._display(r, directory) for r in category.relations)
            if not relations:
                continue
            views.append(CategoryView(key=category.key, title=category.title, relations=relations))
        return views

    def _display(self, record: RelationRecord, directory: CountryDirectory) -> RelationRecord:
        display = directory.lookup(record.tag)
        if display is None:
            return record.with_display(
                name=record.tag,
                flag=record.tag,
                subject_label=subject_label(record.subject_type),
            )
        return record.with_display(
            name=display.name,
            flag=display.flag,
            subject_label=subject_label(record.subject_type),
        )
