"""Module to setup fixtures and other required artifacts for tests

    isort:skip_file
"""

import pytest


def pytest_addoption(parser):
    """Additional options for running tests with pytest"""
    parser.addoption(
        "--slow", action="store_true", default=False, help="Run slow tests"
    )


def pytest_configure(config):
    config.addinivalue_line("markers", "slow: long-running test")


def pytest_collection_modifyitems(config, items):
    """Configure special markers on tests, so as to control execution"""
    run_slow = config.getoption("--slow")

    skip_slow = pytest.mark.skip(reason="need --slow option to run")

    for item in items:
        if "slow" in item.keywords and not run_slow:
            item.add_marker(skip_slow)


@pytest.fixture
def config():
    from custos.config import Config

    return Config.load_from_dict({})


@pytest.fixture
def document_store(config):
    from custos.adapters import document_store_from_config

    store = document_store_from_config(config)

    yield store

    store._data_reset()


@pytest.fixture
def session(document_store):
    with document_store.open_session() as session:
        yield session


@pytest.fixture
def user_store(session):
    from custos.core.user_store import UserStore

    with UserStore(session) as store:
        yield store
