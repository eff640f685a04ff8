import os
import sys

import pytest

# Ensure repository root importable early
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from delve import create_app  # noqa: E402
from delve.rng import GameRng  # noqa: E402


@pytest.fixture(scope="session")
def test_app():
    app = create_app()
    app.config.update({"TESTING": True, "DELVE_SEED": None, "DELVE_RULES": None})
    return app


@pytest.fixture()
def client(test_app):
    return test_app.test_client()


@pytest.fixture()
def rng():
    return GameRng(1234)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    # Game creation must not depend on the developer's shell
    monkeypatch.delenv("DELVE_SEED", raising=False)
    monkeypatch.delenv("DELVE_RULES", raising=False)
