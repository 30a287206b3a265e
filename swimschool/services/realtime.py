# swimschool/services/realtime.py
"""
Feed de mudanças em processo.

Cada escrita primária confirmada publica um ChangeEvent na coleção
correspondente. Assinantes recebem os eventos na ordem de commit daquela
coleção (não há ordem global entre coleções). LiveQuery mantém um recorte
filtrado dos documentos e entrega ao listener um snapshot já reordenado por
createdAt desc, do mesmo jeito que as telas esperam.
"""
from __future__ import annotations

import logging
import threading
from collections import defaultdict
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Optional

logger = logging.getLogger(__name__)

class ChangeKind(str, Enum):
    ADDED = "added"
    MODIFIED = "modified"
    REMOVED = "removed"

@dataclass
class ChangeEvent:
    collection: str
    id: str
    kind: ChangeKind
    data: Dict[str, Any] = field(default_factory=dict)

Listener = Callable[[ChangeEvent], None]
Predicate = Callable[[Dict[str, Any]], bool]

class ChangeFeed:
    def __init__(self):
        self._lock = threading.Lock()
        self._listeners: Dict[str, List[tuple]] = defaultdict(list)

    def subscribe(self, collection: str, listener: Listener, where: Optional[Predicate] = None) -> Callable[[], None]:
        entry = (listener, where)
        with self._lock:
            self._listeners[collection].append(entry)

        def unsubscribe() -> None:
            with self._lock:
                if entry in self._listeners[collection]:
                    self._listeners[collection].remove(entry)
        return unsubscribe

    def publish(self, event: ChangeEvent) -> None:
        with self._lock:
            entries = list(self._listeners[event.collection])
        for listener, where in entries:
            # REMOVED sempre passa: o assinante precisa tirar o doc do recorte
            if where is not None and event.kind != ChangeKind.REMOVED and not where(event.data):
                continue
            try:
                listener(event)
            except Exception:
                logger.exception("Change listener failed for %s/%s", event.collection, event.id)

    def listener_count(self, collection: str) -> int:
        with self._lock:
            return len(self._listeners[collection])

def _created_at(doc: Dict[str, Any]) -> str:
    value = doc.get("createdAt") or doc.get("date") or ""
    return value.isoformat() if hasattr(value, "isoformat") else str(value)

class LiveQuery:
    def __init__(
        self,
        feed: ChangeFeed,
        collection: str,
        on_snapshot: Callable[[List[Dict[str, Any]]], None],
        where: Optional[Predicate] = None,
        initial: Iterable[Dict[str, Any]] = (),
    ):
        self.where = where
        self.on_snapshot = on_snapshot
        self._docs: Dict[str, Dict[str, Any]] = {
            d["id"]: d for d in initial if where is None or where(d)
        }
        self._unsubscribe = feed.subscribe(collection, self._apply)

    def snapshot(self) -> List[Dict[str, Any]]:
        return sorted(self._docs.values(), key=_created_at, reverse=True)

    def _apply(self, event: ChangeEvent) -> None:
        if event.kind == ChangeKind.REMOVED:
            if self._docs.pop(event.id, None) is None:
                return
        elif self.where is None or self.where(event.data):
            self._docs[event.id] = event.data
        elif self._docs.pop(event.id, None) is None:
            # saiu do filtro e nunca esteve no recorte
            return
        self.on_snapshot(self.snapshot())

    def close(self) -> None:
        self._unsubscribe()

change_feed = ChangeFeed()
