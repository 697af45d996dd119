from __future__ import annotations

import copy
import threading
from typing import Any, Mapping, Optional, Sequence

from ..core.enums import ChangeType
from .changes import ChangeFeed, Predicate, Subscription
from .model import ChangeEvent, Document, ensure_version, merge_documents
from .repository import DocumentStore


class InMemoryDocumentStore(DocumentStore):
    """Process-local store (development, tests, demos)."""

    def __init__(self, *, feed: Optional[ChangeFeed] = None):
        self._docs: dict[tuple[str, str], Document] = {}
        self._lock = threading.RLock()
        self._feed = feed or ChangeFeed()

    def get(self, collection: str, doc_id: str) -> Optional[Document]:
        with self._lock:
            doc = self._docs.get((collection, doc_id))
            return _copy(doc) if doc else None

    def set(
        self,
        collection: str,
        doc_id: str,
        data: Mapping[str, Any],
        *,
        merge: bool = False,
        expected_version: Optional[int] = None,
    ) -> int:
        with self._lock:
            current = self._docs.get((collection, doc_id))
            ensure_version(collection, doc_id, current.version if current else 0, expected_version)

            if merge and current:
                body = merge_documents(current.data, data)
            else:
                body = copy.deepcopy(dict(data))
            version = (current.version if current else 0) + 1
            self._docs[(collection, doc_id)] = Document(collection, doc_id, body, version)

        change = ChangeType.MODIFIED if current else ChangeType.ADDED
        self._feed.publish(ChangeEvent(collection, doc_id, change, version, copy.deepcopy(body)))
        return version

    def create(self, collection: str, doc_id: str, data: Mapping[str, Any]) -> int:
        return self.set(collection, doc_id, data, expected_version=0)

    def delete(self, collection: str, doc_id: str, *, expected_version: Optional[int] = None) -> bool:
        with self._lock:
            current = self._docs.get((collection, doc_id))
            if current is None:
                return False
            ensure_version(collection, doc_id, current.version, expected_version)
            del self._docs[(collection, doc_id)]

        self._feed.publish(ChangeEvent(collection, doc_id, ChangeType.REMOVED, current.version))
        return True

    def list(self, collection: str, *, prefix: Optional[str] = None) -> Sequence[Document]:
        with self._lock:
            docs = [
                _copy(d)
                for (coll, doc_id), d in self._docs.items()
                if coll == collection and (prefix is None or doc_id.startswith(prefix))
            ]
        docs.sort(key=lambda d: d.doc_id)
        return docs

    def subscribe(self, collection: str, *, predicate: Optional[Predicate] = None) -> Subscription:
        return self._feed.subscribe(collection, predicate=predicate)


def _copy(doc: Document) -> Document:
    return Document(doc.collection, doc.doc_id, copy.deepcopy(doc.data), doc.version)
