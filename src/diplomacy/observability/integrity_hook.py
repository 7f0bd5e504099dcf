import json
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timezone
from threading import Lock
from typing import Any, Callable, Dict, List, Optional

from src.diplomacy.domain.diplomatic_edge import DiplomaticEdge

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IntegrityFault:
    """
    One edge skipped during classification because the viewpoint
    did not match exactly one of its sides.
    """
    at: datetime
    viewpoint_tag: str
    category_key: str
    edge: DiplomaticEdge
    reason: str


class IntegrityFaultHook(ABC):
    @abstractmethod
    def on_fault(self, fault: IntegrityFault) -> None:
        pass


class NoopIntegrityFaultHook(IntegrityFaultHook):
    def on_fault(self, fault: IntegrityFault) -> None:
        return


class LoggingIntegrityFaultHook(IntegrityFaultHook):
    """
    Writes each fault as a JSON log line and optionally forwards it.
    A failing callback is logged and never propagates into classification.
    """

    def __init__(
        self,
        fault_logger: Optional[logging.Logger] = None,
        callback: Optional[Callable[[IntegrityFault], None]] = None,
    ):
        self.fault_logger = fault_logger or logging.getLogger("diplomacy.integrity")
        self.callback = callback

    def on_fault(self, fault: IntegrityFault) -> None:
        payload: Dict[str, Any] = {
            "timestamp": fault.at.isoformat(),
            "event_type": "DIPLOMACY_INTEGRITY_FAULT",
            "viewpoint": fault.viewpoint_tag,
            "category": fault.category_key,
            "kind": fault.edge.kind.value,
            "first": fault.edge.first.tag,
            "second": fault.edge.second.tag,
            "reason": fault.reason,
        }
        self.fault_logger.warning(json.dumps(payload, default=str, ensure_ascii=True))
        if self.callback:
            try:
                self.callback(fault)
            except Exception:
                logger.exception("Integrity fault callback failed")


class RecordingIntegrityFaultHook(IntegrityFaultHook):
    """
    Keeps faults in memory for diagnostics views and tests.
    """

    def __init__(self):
        self._faults: List[IntegrityFault] = []
        self._lock = Lock()

    def on_fault(self, fault: IntegrityFault) -> None:
        with self._lock:
            self._faults.append(fault)

    @property
    def faults(self) -> List[IntegrityFault]:
        with self._lock:
            return list(self._faults)

    def clear(self) -> None:
        with self._lock:
            self._faults.clear()


def make_fault(viewpoint_tag: str, category_key: str, edge: DiplomaticEdge, reason: str) -> IntegrityFault:
    return IntegrityFault(
        at=datetime.now(timezone.utc),
        viewpoint_tag=viewpoint_tag,
        category_key=category_key,
        edge=edge,
        reason=reason,
    )
