"""Pytest configuration and shared fixtures for the paging cursor tests."""

import logging
from typing import Optional

import pytest
from fastapi import Depends, FastAPI
from fastapi.testclient import TestClient

from paging_cursor.dependencies import get_paging_cursor
from paging_cursor.errors import register_exception_handlers
from paging_cursor.pagination.cursor import PagingCursor


# Keep test output quiet
logging.getLogger("httpx").setLevel(logging.WARNING)


@pytest.fixture
def context():
    """Query context carried by cursors in tests."""
    return {"filter": "test", "sortBy": "+name"}


@pytest.fixture
def small_cursor() -> PagingCursor:
    """Ascending cursor positioned before large_cursor."""
    return PagingCursor([False, "hello", 2])


@pytest.fixture
def large_cursor() -> PagingCursor:
    """Ascending cursor positioned after small_cursor."""
    return PagingCursor([False, "hello", 10])


@pytest.fixture
def app() -> FastAPI:
    """Minimal app with a listing endpoint that accepts a cursor."""
    app = FastAPI()
    register_exception_handlers(app)

    @app.get("/items")
    def list_items(cursor: Optional[PagingCursor] = Depends(get_paging_cursor)):
        if cursor is None:
            return {"values": None, "context": None}
        return {"values": list(cursor.values), "context": cursor.context}

    return app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    """Test client for the cursor app."""
    return TestClient(app)
