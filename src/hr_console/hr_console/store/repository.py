from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, Sequence

from .changes import Predicate, Subscription
from .model import Document


class DocumentStore(Protocol):
    """Collection/key document store used by every repository.

    Writes with `merge=True` only touch the given fields; without merge the
    whole document is replaced. Each write bumps the document version and
    `expected_version` turns the write into a compare-and-swap.
    """

    def get(self, collection: str, doc_id: str) -> Optional[Document]:
        raise NotImplementedError

    def set(
        self,
        collection: str,
        doc_id: str,
        data: Mapping[str, Any],
        *,
        merge: bool = False,
        expected_version: Optional[int] = None,
    ) -> int:
        raise NotImplementedError

    def create(self, collection: str, doc_id: str, data: Mapping[str, Any]) -> int:
        """Write only if the document does not exist yet (ConcurrencyError otherwise)."""

        raise NotImplementedError

    def delete(self, collection: str, doc_id: str, *, expected_version: Optional[int] = None) -> bool:
        raise NotImplementedError

    def list(self, collection: str, *, prefix: Optional[str] = None) -> Sequence[Document]:
        raise NotImplementedError

    def subscribe(self, collection: str, *, predicate: Optional[Predicate] = None) -> Subscription:
        raise NotImplementedError
