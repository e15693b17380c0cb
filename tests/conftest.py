"""Shared fixtures: an in-memory database per test and an app bound to it."""

from __future__ import annotations

from typing import Any, Dict, Iterator, Optional

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session

from timesplit.app import create_app
from timesplit.core import build_engine, init_schema

TEST_API_KEY = "s3cret-key"


@pytest.fixture
def engine():
    engine = build_engine("sqlite://", poolclass=StaticPool)
    init_schema(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine) -> Iterator[Session]:
    with Session(engine) as session:
        yield session


@pytest.fixture
def client(engine) -> Iterator[TestClient]:
    app = create_app(engine=engine, api_key="", api_prefix="/api")
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def gated_client(engine) -> Iterator[TestClient]:
    app = create_app(engine=engine, api_key=TEST_API_KEY, api_prefix="/api")
    with TestClient(app) as test_client:
        yield test_client


def make_payload(
    session_id: str = "run-001",
    *,
    player: str = "alice",
    mode: str = "racing",
    started_at: int = 1_700_000_000_000,
    duration_ms: int = 60_000,
    total_score: Any = 100,
    splits: Optional[list] = None,
) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "id": session_id,
        "player": player,
        "mode": mode,
        "startedAt": started_at,
        "durationMs": duration_ms,
        "totalScore": total_score,
    }
    if splits is not None:
        payload["splits"] = splits
    return payload


def split(t: int, lap: int = 1, score: Any = 10, note: Optional[str] = None) -> Dict[str, Any]:
    return {"t": t, "lap": lap, "score": score, "note": note}
