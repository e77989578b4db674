import os
import sys
import asyncio
import inspect

import pytest

# Ensure project root is on sys.path so `import app` works in tests
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from fastapi.testclient import TestClient

from app.config import Settings
from app.user.store import UserStore


TEST_TOKEN = "test-token-1234"


def pytest_pyfunc_call(pyfuncitem):
    """Allow running async tests without pytest-asyncio.

    If the test function is a coroutine, run it in a fresh event loop.
    """
    testfunction = pyfuncitem.obj
    if inspect.iscoroutinefunction(testfunction):
        funcargs = pyfuncitem.funcargs
        sig = inspect.signature(testfunction)
        # Filter only the parameters that the test function expects
        allowed = {name: funcargs[name] for name in sig.parameters.keys() if name in funcargs}
        asyncio.run(testfunction(**allowed))
        return True
    return None


@pytest.fixture
def auth_token():
    return TEST_TOKEN


@pytest.fixture
def settings(auth_token):
    return Settings(AUTH_TOKEN=auth_token, APP_ENV="dev", _env_file=None)


@pytest.fixture
def store():
    return UserStore()


@pytest.fixture
def app(settings, store):
    from main import create_app
    return create_app(settings, store)


@pytest.fixture
def client(app, auth_token):
    return TestClient(app, headers={"Authorization": f"Bearer {auth_token}"})


@pytest.fixture
def anon_client(app):
    return TestClient(app)
