"""Package for Concrete Implementations of Custos document stores"""

import logging

from custos.adapters.memory import MemoryDocumentSession, MemoryDocumentStore
from custos.exceptions import ConfigurationError
from custos.port.session import BaseDocumentStore
from custos.utils import import_from_full_path
from custos.utils.logging import configure_from_config

logger = logging.getLogger(__name__)


DOCUMENT_STORES = {
    "memory": "custos.adapters.memory.MemoryDocumentStore",
}


def document_store_from_config(config: dict, name: str = "default") -> BaseDocumentStore:
    """Instantiate the document store named in the `document_store` section.

    `provider` is either a registered name, like `memory`, or the dotted path
    of a `BaseDocumentStore` subclass. Logging is set up first when the
    `logging` section asks for it.
    """
    configure_from_config(config)

    store_config = config.get("document_store") or {}
    provider = store_config.get("provider")
    if not provider:
        raise ConfigurationError("You must define a document store `provider`")

    provider_full_path = DOCUMENT_STORES.get(provider, provider)
    if "." not in provider_full_path:
        raise ConfigurationError(f"Unknown document store provider `{provider}`")

    try:
        store_cls = import_from_full_path(provider_full_path)
    except (ImportError, AttributeError) as exc:
        raise ConfigurationError(
            f"Could not load document store provider `{provider}`"
        ) from exc

    document_store = store_cls(name, config)

    # Check that the store can be reached before handing it out
    if not document_store.is_alive():
        raise ConfigurationError(f"Document store `{name}` ({provider}) is not reachable")

    logger.debug(f"Initialized document store {name} ({provider})")
    return document_store


__all__ = [
    "DOCUMENT_STORES",
    "MemoryDocumentSession",
    "MemoryDocumentStore",
    "document_store_from_config",
]
