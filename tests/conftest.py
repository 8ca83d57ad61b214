import base64
import json

import pytest

from tokengen.settings import get_settings

ORIGINAL_KEY = "Q29va2llIEJhbm5lciB1c2luZyBPbmVUcnVzdA=="
FIXED_NOW = 1700000000


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep a developer's shell or .env from leaking into settings."""
    for name in ("JWT_SECRET", "JWT_SECRET_ENCODING", "JWT_SUBJECT",
                 "JWT_ALGORITHM", "TOKEN_LIFETIME", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def secret():
    return ORIGINAL_KEY


@pytest.fixture
def frozen_clock(monkeypatch):
    """Pin time.time() to a fraction of a second past FIXED_NOW."""
    monkeypatch.setattr("tokengen.token_gen.time.time", lambda: FIXED_NOW + 0.75)
    return FIXED_NOW


def segment(token, index):
    part = token.split(".")[index]
    return base64.urlsafe_b64decode(part + "=" * (-len(part) % 4))


def payload_of(token):
    return json.loads(segment(token, 1))
