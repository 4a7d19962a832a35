"""
Shared pytest fixtures.

The engine is pure, so most tests build dataclasses directly (see
tests/factories.py); endpoint tests go through the FastAPI TestClient with
camelCase JSON documents.
"""
import pytest
from fastapi.testclient import TestClient

from devpanel.main import app
from devpanel.models.rules import RuleConfig
from tests.factories import make_config


@pytest.fixture()
def config() -> RuleConfig:
    return make_config()


@pytest.fixture()
def client():
    with TestClient(app) as c:
        yield c
