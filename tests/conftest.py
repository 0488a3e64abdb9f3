import os
from pathlib import Path

import pytest

TEST_SELLER_KEY = "test-seller-key"


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Pytest hook to run before collecting tests.

    Pins the config overlay and the settings the HTTP layer reads, so every
    test sees the fake payment gateway and a known seller key.
    """
    os.environ["PROTEAN_ENV"] = session.config.option.env
    os.environ["PAYMENT_GATEWAY"] = "fake"
    os.environ["SELLER_API_KEY"] = TEST_SELLER_KEY
    os.environ.setdefault("LOG_LEVEL", "WARNING")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = str(Path(item.fspath))

        if "/domain/" in test_path:
            item.add_marker(pytest.mark.domain)
        elif "/application/" in test_path:
            item.add_marker(pytest.mark.application)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)
        elif "/bdd/" in test_path:
            item.add_marker(pytest.mark.bdd)


@pytest.fixture(autouse=True)
def _fresh_gateway():
    """Every test starts from a newly built gateway."""
    from payments.gateway import reset_gateway

    reset_gateway()
    yield
    reset_gateway()
