"""Shared fixtures: synthetic photos and an API client."""

import pytest
from fastapi.testclient import TestClient

from api.app import create_app
from helpers import encode_png, solid_image


@pytest.fixture
def make_png():
    def _make(rgb=(200, 190, 180), width=400, height=300) -> bytes:
        return encode_png(solid_image(rgb, width, height))
    return _make


@pytest.fixture
def client():
    with TestClient(create_app()) as c:
        yield c


@pytest.fixture
def anyio_backend():
    return "asyncio"
