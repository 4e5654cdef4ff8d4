"""Ports for the document database that user stores persist into"""

from abc import ABCMeta, abstractmethod
from typing import Any, Optional, TypeVar

from custos.core.conventions import Conventions

D = TypeVar("D")


class BaseDocumentSession(metaclass=ABCMeta):
    """A unit of work against a document store.

    Loaded and stored documents are tracked by the session. Writes and deletes
    are only registered; nothing reaches the store until `save_changes` is
    called, and then everything pending is written as one batch.
    """

    @property
    @abstractmethod
    def conventions(self) -> Conventions:
        """Naming conventions of the store this session belongs to"""

    @abstractmethod
    def load(self, document_cls: type[D], key: str) -> Optional[D]:
        """Return the document stored under `key`, or `None`"""

    @abstractmethod
    def load_including(
        self, document_cls: type[D], key: str, include: str
    ) -> Optional[D]:
        """Load a document and, in the same round trip, the document whose key
        is held in its `include` attribute.

        The included document lands in the session cache, so a following
        `load` of it does not go back to the store.
        """

    @abstractmethod
    def store(self, document: Any) -> None:
        """Register `document` for insert or update on the next `save_changes`"""

    @abstractmethod
    def delete(self, document: Any) -> None:
        """Register `document` for deletion on the next `save_changes`"""

    @abstractmethod
    def save_changes(self) -> None:
        """Write all pending changes to the store as a single batch"""

    def close(self) -> None:
        """Release the session. Pending changes are discarded."""

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False


class BaseDocumentStore(metaclass=ABCMeta):
    """Gateway to one document database: holds its conventions and hands out
    sessions"""

    def __init__(self, name: str, config: dict) -> None:
        self.name = name
        self.config = config
        self.conventions = Conventions.from_config(config.get("conventions"))

    @abstractmethod
    def open_session(self) -> BaseDocumentSession:
        """Start a new unit of work"""

    @abstractmethod
    def is_alive(self) -> bool:
        """Check if the store can be reached"""

    @abstractmethod
    def _data_reset(self) -> None:
        """Flush all documents. Meant for tests."""
