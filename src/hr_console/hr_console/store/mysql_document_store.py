from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Sequence

import mysql.connector

from ..core.enums import ChangeType
from ..core.exceptions import ConcurrencyError, StoreError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, dump_json, fetchall, fetchone, like_prefix, load_json
from .changes import ChangeFeed, Predicate, Subscription
from .model import ChangeEvent, Document, ensure_version, merge_documents
from .repository import DocumentStore

logger = logging.getLogger(__name__)


class MySQLDocumentStore(DocumentStore):
    """Documents kept as JSON rows in a single `documents` table.

    Writes lock the row (SELECT ... FOR UPDATE) for the length of the
    transaction, so merge and compare-and-swap happen atomically per document.
    Change events are published to in-process subscribers only.
    """

    def __init__(self, conn_factory: DatabaseConnection, *, feed: Optional[ChangeFeed] = None):
        self._conn_factory = conn_factory
        self._feed = feed or ChangeFeed()

    def get(self, collection: str, doc_id: str) -> Optional[Document]:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    SELECT collection, doc_id, data, version
                    FROM documents
                    WHERE collection=%s AND doc_id=%s
                    """,
                    (collection, doc_id),
                )
                r = fetchone(cur)
        except mysql.connector.Error as e:
            raise StoreError(f"Read {collection}/{doc_id} failed: {e}") from e
        return _to_document(r) if r else None

    def set(
        self,
        collection: str,
        doc_id: str,
        data: Mapping[str, Any],
        *,
        merge: bool = False,
        expected_version: Optional[int] = None,
    ) -> int:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    "SELECT data, version FROM documents WHERE collection=%s AND doc_id=%s FOR UPDATE",
                    (collection, doc_id),
                )
                r = fetchone(cur)
                current_version = int(r["version"]) if r else 0
                ensure_version(collection, doc_id, current_version, expected_version)

                body = merge_documents(load_json(r["data"]), data) if (merge and r) else dict(data)
                version = current_version + 1
                if r:
                    cur.execute(
                        "UPDATE documents SET data=%s, version=%s WHERE collection=%s AND doc_id=%s",
                        (dump_json(body), version, collection, doc_id),
                    )
                else:
                    cur.execute(
                        "INSERT INTO documents(collection, doc_id, data, version) VALUES(%s,%s,%s,%s)",
                        (collection, doc_id, dump_json(body), version),
                    )
        except mysql.connector.IntegrityError as e:
            # Another writer inserted the same key between our SELECT and INSERT.
            logger.warning("Concurrent insert on %s/%s", collection, doc_id)
            raise ConcurrencyError(f"{collection}/{doc_id} was created concurrently") from e
        except mysql.connector.Error as e:
            raise StoreError(f"Write {collection}/{doc_id} failed: {e}") from e

        change = ChangeType.MODIFIED if current_version else ChangeType.ADDED
        self._feed.publish(ChangeEvent(collection, doc_id, change, version, body))
        return version

    def create(self, collection: str, doc_id: str, data: Mapping[str, Any]) -> int:
        return self.set(collection, doc_id, data, expected_version=0)

    def delete(self, collection: str, doc_id: str, *, expected_version: Optional[int] = None) -> bool:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    "SELECT version FROM documents WHERE collection=%s AND doc_id=%s FOR UPDATE",
                    (collection, doc_id),
                )
                r = fetchone(cur)
                if not r:
                    return False
                ensure_version(collection, doc_id, int(r["version"]), expected_version)
                cur.execute("DELETE FROM documents WHERE collection=%s AND doc_id=%s", (collection, doc_id))
        except mysql.connector.Error as e:
            raise StoreError(f"Delete {collection}/{doc_id} failed: {e}") from e

        self._feed.publish(ChangeEvent(collection, doc_id, ChangeType.REMOVED, int(r["version"])))
        return True

    def list(self, collection: str, *, prefix: Optional[str] = None) -> Sequence[Document]:
        sql = "SELECT collection, doc_id, data, version FROM documents WHERE collection=%s"
        params: list[Any] = [collection]
        if prefix:
            sql += " AND doc_id LIKE %s"
            params.append(like_prefix(prefix))
        sql += " ORDER BY doc_id"

        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(sql, tuple(params))
                rows = fetchall(cur)
        except mysql.connector.Error as e:
            raise StoreError(f"List {collection} failed: {e}") from e
        return [_to_document(r) for r in rows]

    def subscribe(self, collection: str, *, predicate: Optional[Predicate] = None) -> Subscription:
        return self._feed.subscribe(collection, predicate=predicate)


def _to_document(r: Mapping[str, Any]) -> Document:
    return Document(
        collection=str(r["collection"]),
        doc_id=str(r["doc_id"]),
        data=load_json(r["data"]),
        version=int(r["version"]),
    )
