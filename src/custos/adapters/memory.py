"""Implementation of a dictionary based document store"""

import copy
import logging
from collections import defaultdict
from itertools import count
from threading import Lock
from typing import Any, Optional

from custos.core.conventions import Conventions
from custos.core.serializer import from_document, to_document
from custos.exceptions import (
    DocumentConflictError,
    InvalidArgumentError,
    InvalidOperationError,
    NonUniqueObjectError,
)
from custos.port.session import BaseDocumentSession, BaseDocumentStore
from custos.utils import fully_qualified_name

logger = logging.getLogger(__name__)


def _type_names(document_cls: type) -> set[str]:
    """Fully qualified names of `document_cls` and all of its subclasses"""
    names = {fully_qualified_name(document_cls)}
    for subclass in document_cls.__subclasses__():
        names |= _type_names(subclass)
    return names


class MemoryDocumentSession(BaseDocumentSession):
    """A unit of work over a `MemoryDocumentStore`.

    Documents are deserialized into fresh objects on first load and kept in an
    identity map, so every load of a key within the session returns the same
    object. Changes made to tracked objects, new documents and deletions are
    written back to the store together by `save_changes`.
    """

    def __init__(self, document_store: "MemoryDocumentStore") -> None:
        self._document_store = document_store
        self.is_active = True

        # Identity map of tracked documents, by key
        self._entities: dict[str, Any] = {}
        # Stored form of each tracked document as of its load or last commit
        self._originals: dict[str, dict] = {}
        # Raw records fetched through `load_including`, not yet materialized
        self._included: dict[str, dict] = {}
        self._deleted: dict[str, Any] = {}

        self.number_of_requests = 0

    @property
    def conventions(self) -> Conventions:
        return self._document_store.conventions

    def _throw_if_closed(self) -> None:
        if not self.is_active:
            raise InvalidOperationError("Session has been closed")

    def _is_of_type(self, record: dict, document_cls: type) -> bool:
        """Whether a stored record was written as a `document_cls` document.

        A key that holds a document of another type is treated as missing.
        """
        metadata = record["metadata"]
        if metadata["collection"] != self.conventions.get_type_tag_name(document_cls):
            return False
        return metadata["python_type"] in _type_names(document_cls)

    def _track(self, key: str, document_cls: type, record: dict):
        entity = from_document(document_cls, record["data"])
        self._entities[key] = entity
        self._originals[key] = record["data"]
        return entity

    def load(self, document_cls: type, key: str) -> Optional[Any]:
        self._throw_if_closed()

        if key in self._deleted:
            return None
        if key in self._entities:
            entity = self._entities[key]
            return entity if isinstance(entity, document_cls) else None
        if key in self._included:
            if not self._is_of_type(self._included[key], document_cls):
                return None
            return self._track(key, document_cls, self._included.pop(key))

        self.number_of_requests += 1
        record = self._document_store._read(key)
        if record is None or not self._is_of_type(record, document_cls):
            return None

        return self._track(key, document_cls, record)

    def load_including(
        self, document_cls: type, key: str, include: str
    ) -> Optional[Any]:
        self._throw_if_closed()

        if key in self._deleted:
            return None

        entity = self._entities.get(key)
        if entity is None:
            self.number_of_requests += 1
            record = self._document_store._read(key)
            if record is None or not self._is_of_type(record, document_cls):
                return None
            entity = self._track(key, document_cls, record)
            prefetch = True
        elif not isinstance(entity, document_cls):
            return None
        else:
            prefetch = False

        related_key = getattr(entity, include, None)
        if (
            related_key is not None
            and related_key not in self._entities
            and related_key not in self._included
            and related_key not in self._deleted
        ):
            if not prefetch:
                # The document was cached but its reference was not
                self.number_of_requests += 1

            related_record = self._document_store._read(related_key)
            if related_record is not None:
                self._included[related_key] = related_record

        return entity

    def store(self, document: Any) -> None:
        self._throw_if_closed()
        if document is None:
            raise InvalidArgumentError("document")

        if document.id is None:
            document.id = self._document_store._generate_key(document.__class__)

        key = document.id
        tracked = self._entities.get(key)
        if tracked is not None and tracked is not document:
            raise NonUniqueObjectError(
                f"Attempted to associate a different object with key '{key}'"
            )

        self._deleted.pop(key, None)
        self._included.pop(key, None)
        self._entities[key] = document

    def delete(self, document: Any) -> None:
        self._throw_if_closed()
        if document is None:
            raise InvalidArgumentError("document")

        key = document.id
        tracked = self._entities.get(key)
        if tracked is not None and tracked is not document:
            raise NonUniqueObjectError(
                f"Attempted to delete a different object than the one tracked under '{key}'"
            )

        self._entities.pop(key, None)
        self._included.pop(key, None)
        self._deleted[key] = document

    def save_changes(self) -> None:
        self._throw_if_closed()

        writes = {}
        for key, entity in self._entities.items():
            data = to_document(entity)
            if self._originals.get(key) != data:
                writes[key] = (entity, data)

        # Keys never loaded or committed through this session are new
        new_keys = {key for key in writes if key not in self._originals}
        deletes = list(self._deleted)

        self.number_of_requests += 1
        self._document_store._apply(writes, new_keys, deletes)

        for key, (_, data) in writes.items():
            self._originals[key] = data
        for key in deletes:
            self._originals.pop(key, None)
        self._deleted = {}

        logger.debug(
            f"Session committed {len(writes)} write(s) and {len(deletes)} delete(s)"
        )

    def close(self) -> None:
        self.is_active = False
        self._entities = {}
        self._originals = {}
        self._included = {}
        self._deleted = {}


class MemoryDocumentStore(BaseDocumentStore):
    """Document store that keeps documents in a dictionary.

    Each record holds a deep copy of the stored form of a document and its
    metadata:

        {
            "IdentityUsers/alice": {
                "data": {"id": "IdentityUsers/alice", "userName": "alice", ...},
                "metadata": {"collection": "IdentityUsers", "python_type": "..."},
            }
        }
    """

    __database__ = "memory"

    def __init__(self, name: str, config: dict) -> None:
        super().__init__(name, config)

        store_config = config.get("document_store", {}) or {}
        self.optimistic_concurrency = store_config.get("optimistic_concurrency", False)

        self._documents: dict[str, dict] = {}
        self._lock = Lock()
        self._counters = defaultdict(lambda: count(1))

    def open_session(self) -> MemoryDocumentSession:
        """Return a session object

        Sessions read from the shared dictionary and only write back to it on
        `save_changes`.
        """
        return MemoryDocumentSession(self)

    def is_alive(self) -> bool:
        """Check if the connection is alive"""
        return True

    def _data_reset(self) -> None:
        """Reset data"""
        with self._lock:
            self._documents = {}
            self._counters = defaultdict(lambda: count(1))

    def _generate_key(self, document_cls: type) -> str:
        prefix = self.conventions.document_key_prefix(document_cls)
        with self._lock:
            number = next(self._counters[prefix])
        return f"{prefix}{self.conventions.identity_parts_separator}{number}"

    def _read(self, key: str) -> Optional[dict]:
        record = self._documents.get(key)
        return copy.deepcopy(record) if record is not None else None

    def _apply(self, writes: dict, new_keys: set, deletes: list) -> None:
        """Write one batch of changes. Either all of it is applied or none."""
        with self._lock:
            if self.optimistic_concurrency:
                conflicts = sorted(key for key in new_keys if key in self._documents)
                if conflicts:
                    logger.error(f"Document key conflict on commit: {conflicts}")
                    raise DocumentConflictError(
                        f"Documents already exist with keys {conflicts}",
                        extra_info={"keys": conflicts},
                    )

            for key in deletes:
                self._documents.pop(key, None)

            for key, (entity, data) in writes.items():
                document_cls = entity.__class__
                self._documents[key] = {
                    "data": copy.deepcopy(data),
                    "metadata": {
                        "collection": self.conventions.get_type_tag_name(document_cls),
                        "python_type": fully_qualified_name(document_cls),
                    },
                }

    def documents(self, collection: Optional[str] = None) -> dict[str, dict]:
        """Return a copy of stored documents, optionally for one collection only"""
        with self._lock:
            return {
                key: copy.deepcopy(record["data"])
                for key, record in self._documents.items()
                if collection is None or record["metadata"]["collection"] == collection
            }

    def __len__(self) -> int:
        return len(self._documents)

    def __repr__(self) -> str:
        return f"<MemoryDocumentStore: {self.name}>"
