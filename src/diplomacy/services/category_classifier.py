import logging
from typing import Iterable, List, Optional

from src.diplomacy.domain.category_rule import CategoryRule
from src.diplomacy.domain.diplomatic_edge import DiplomaticEdge
from src.diplomacy.domain.exceptions import PerspectiveIntegrityError
from src.diplomacy.domain.relation_view import CategoryView, RelationRecord
from src.diplomacy.interfaces.category_classifier import CategoryClassifier
from src.diplomacy.interfaces.perspective_normalizer import PerspectiveNormalizer
from src.diplomacy.observability.integrity_hook import (
    IntegrityFaultHook,
    NoopIntegrityFaultHook,
    make_fault,
)
from src.diplomacy.services.category_registry import CategoryRegistry
from src.diplomacy.services.perspective_normalizer import StrictPerspectiveNormalizer

logger = logging.getLogger(__name__)


class _RegistryClassifier(CategoryClassifier):
    def __init__(
        self,
        registry: Optional[CategoryRegistry] = None,
        normalizer: Optional[PerspectiveNormalizer] = None,
        fault_hook: Optional[IntegrityFaultHook] = None,
        fail_fast: bool = False,
    ):
        self.registry = registry or CategoryRegistry()
        self.normalizer = normalizer or StrictPerspectiveNormalizer()
        self.fault_hook = fault_hook or NoopIntegrityFaultHook()
        self.fail_fast = fail_fast

    def _relate(self, rule: CategoryRule, edge: DiplomaticEdge, viewpoint_tag: str) -> Optional[RelationRecord]:
        try:
            other = self.normalizer.normalize(edge, viewpoint_tag)
        except PerspectiveIntegrityError as exc:
            if self.fail_fast:
                raise
            logger.debug("Skipping edge in category %s: %s", rule.key, exc)
            self.fault_hook.on_fault(make_fault(viewpoint_tag, rule.key, edge, str(exc)))
            return None
        return rule.extract(edge, other)

    def _views(self, buckets: List[List[RelationRecord]]) -> List[CategoryView]:
        return [
            CategoryView(key=rule.key, title=rule.title, relations=tuple(relations))
            for rule, relations in zip(self.registry.rules, buckets)
            if relations
        ]


class TableCategoryClassifier(_RegistryClassifier):
    """
    Straight table scan: every rule filters the whole edge list.
    O(categories x edges).
    """

    def classify(self, edges: Iterable[DiplomaticEdge], viewpoint_tag: str) -> List[CategoryView]:
        edge_list = list(edges)
        buckets: List[List[RelationRecord]] = []
        for rule in self.registry.rules:
            relations: List[RelationRecord] = []
            for edge in edge_list:
                if not rule.matches(edge, viewpoint_tag):
                    continue
                record = self._relate(rule, edge, viewpoint_tag)
                if record is not None:
                    relations.append(record)
            buckets.append(relations)
        return self._views(buckets)


class DispatchCategoryClassifier(_RegistryClassifier):
    """
    Visits each edge once and dispatches it to the rules declared for its kind.
    Produces the same output as TableCategoryClassifier.
    """

    def classify(self, edges: Iterable[DiplomaticEdge], viewpoint_tag: str) -> List[CategoryView]:
        buckets: List[List[RelationRecord]] = [[] for _ in self.registry.rules]
        for edge in edges:
            for index, rule in self.registry.rules_for_kind(edge.kind):
                if not rule.membership(edge, viewpoint_tag):
                    continue
                record = self._relate(rule, edge, viewpoint_tag)
                if record is not None:
                    buckets[index].append(record)
        return self._views(buckets)
