from collections import OrderedDict
from threading import Lock
from typing import Iterable, List, Optional, Tuple
from uuid import UUID

from src.config.settings import Settings
from src.diplomacy.domain.country import CountryDirectory
from src.diplomacy.domain.diplomacy_snapshot import DiplomacySnapshot
from src.diplomacy.domain.diplomatic_edge import DiplomaticEdge
from src.diplomacy.domain.relation_view import CategoryView
from src.diplomacy.interfaces.category_classifier import CategoryClassifier
from src.diplomacy.interfaces.view_assembler import ViewAssembler
from src.diplomacy.observability.integrity_hook import (
    IntegrityFaultHook,
    LoggingIntegrityFaultHook,
    NoopIntegrityFaultHook,
)
from src.diplomacy.services.category_classifier import (
    DispatchCategoryClassifier,
    TableCategoryClassifier,
)
from src.diplomacy.services.view_assembler import DirectoryViewAssembler


class DiplomacyViewService:
    """
    Builds the categorized diplomacy view of one country.
    Pure function of (edges, viewpoint, directory).
    """

    def __init__(
        self,
        classifier: Optional[CategoryClassifier] = None,
        assembler: Optional[ViewAssembler] = None,
    ):
        self.classifier = classifier or DispatchCategoryClassifier()
        self.assembler = assembler or DirectoryViewAssembler()

    def classify(
        self,
        edges: Iterable[DiplomaticEdge],
        viewpoint_tag: str,
        directory: Optional[CountryDirectory] = None,
    ) -> List[CategoryView]:
        categories = self.classifier.classify(edges, viewpoint_tag)
        return self.assembler.assemble(categories, directory or CountryDirectory())

    def view_for(self, snapshot: DiplomacySnapshot, viewpoint_tag: str) -> List[CategoryView]:
        return self.classify(snapshot.edges, viewpoint_tag, snapshot.directory)


class MemoizedDiplomacyViewService(DiplomacyViewService):
    """
    Caches snapshot views on (viewpoint, snapshot_id), evicting least recently used.
    """

    def __init__(
        self,
        classifier: Optional[CategoryClassifier] = None,
        assembler: Optional[ViewAssembler] = None,
        max_entries: int = 64,
    ):
        super().__init__(classifier=classifier, assembler=assembler)
        self.max_entries = max(1, int(max_entries))
        self._cache: "OrderedDict[Tuple[str, UUID], List[CategoryView]]" = OrderedDict()
        self._lock = Lock()

    def view_for(self, snapshot: DiplomacySnapshot, viewpoint_tag: str) -> List[CategoryView]:
        key = (viewpoint_tag, snapshot.snapshot_id)
        with self._lock:
            cached = self._cache.get(key)
            if cached is not None:
                self._cache.move_to_end(key)
                return list(cached)

        views = super().view_for(snapshot, viewpoint_tag)

        with self._lock:
            self._cache[key] = views
            self._cache.move_to_end(key)
            while len(self._cache) > self.max_entries:
                self._cache.popitem(last=False)
        return list(views)

    def invalidate(self, snapshot_id: Optional[UUID] = None) -> None:
        with self._lock:
            if snapshot_id is None:
                self._cache.clear()
                return
            for key in [k for k in self._cache if k[1] == snapshot_id]:
                del self._cache[key]

    @property
    def cached_entries(self) -> int:
        with self._lock:
            return len(self._cache)


def build_view_service(
    config: Optional[Settings] = None,
    fault_hook: Optional[IntegrityFaultHook] = None,
) -> MemoizedDiplomacyViewService:
    cfg = config or Settings()
    if fault_hook is None:
        fault_hook = LoggingIntegrityFaultHook() if cfg.LOG_INTEGRITY_FAULTS else NoopIntegrityFaultHook()
    classifier_cls = TableCategoryClassifier if cfg.CLASSIFIER == "table" else DispatchCategoryClassifier
    classifier = classifier_cls(fault_hook=fault_hook, fail_fast=cfg.FAIL_FAST)
    return MemoizedDiplomacyViewService(
        classifier=classifier,
        assembler=DirectoryViewAssembler(),
        max_entries=cfg.VIEW_CACHE_SIZE,
    )


_default_service = DiplomacyViewService()


def classify(
    edges: Iterable[DiplomaticEdge],
    viewpoint_tag: str,
    directory: Optional[CountryDirectory] = None,
) -> List[CategoryView]:
    return _default_service.classify(edges, viewpoint_tag, directory)
