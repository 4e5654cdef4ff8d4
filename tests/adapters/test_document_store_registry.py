import pytest

from custos.adapters import DOCUMENT_STORES, document_store_from_config
from custos.adapters.memory import MemoryDocumentStore
from custos.config import Config
from custos.exceptions import ConfigurationError


class DeadStore(MemoryDocumentStore):
    def is_alive(self) -> bool:
        return False


def test_memory_store_is_registered():
    assert DOCUMENT_STORES["memory"] == "custos.adapters.memory.MemoryDocumentStore"


def test_default_config_builds_memory_store():
    store = document_store_from_config(Config.load_from_dict({}))

    assert isinstance(store, MemoryDocumentStore)
    assert store.name == "default"
    assert store.optimistic_concurrency is False


def test_store_picks_up_conventions_from_config():
    config = Config.load_from_dict({"conventions": {"identity_parts_separator": "-"}})

    store = document_store_from_config(config, name="users")

    assert store.name == "users"
    assert store.conventions.identity_parts_separator == "-"


def test_provider_can_be_a_dotted_path():
    config = Config.load_from_dict(
        {"document_store": {"provider": "custos.adapters.memory.MemoryDocumentStore"}}
    )

    assert isinstance(document_store_from_config(config), MemoryDocumentStore)


@pytest.mark.parametrize(
    "provider", ["", "ravendb", "custos.adapters.memory.Missing", "no_such.module.Store"]
)
def test_unknown_provider_is_rejected(provider):
    config = Config.load_from_dict({"document_store": {"provider": provider}})

    with pytest.raises(ConfigurationError):
        document_store_from_config(config)


def test_unreachable_store_is_rejected():
    config = Config.load_from_dict(
        {"document_store": {"provider": f"{__name__}.DeadStore"}}
    )

    with pytest.raises(ConfigurationError, match="not reachable"):
        document_store_from_config(config)
