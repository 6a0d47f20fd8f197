import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from app.main import app
from app.core.config import AthenaConfig
from app.core.engine import get_orchestrator
from app.core.exceptions import SubmissionError
from app.core.query.orchestrator import QueryOrchestrator
from app.core.schemas import (
    ExecutionStatus,
    QueryExecutionHandle,
    QueryState,
    ResultGrid,
)


class FakeEngine:
    """Scripted stand-in for AthenaEngine: replays states, then hands out the grid."""

    def __init__(self, states=None, grid=None, reason=None, submit_error=None):
        self.states = list(states or [QueryState.SUCCEEDED])
        self.grid = grid or ResultGrid(column_names=[], rows=[])
        self.reason = reason
        self.submit_error = submit_error
        self.submitted = []
        self.status_calls = 0
        self.results_calls = 0

    async def submit(self, request):
        if self.submit_error is not None:
            raise self.submit_error
        self.submitted.append(request)
        return QueryExecutionHandle(id=f"exec-{len(self.submitted)}")

    async def get_status(self, handle):
        # Keep repeating the last state once the script runs out
        index = min(self.status_calls, len(self.states) - 1)
        self.status_calls += 1
        state = self.states[index]
        reason = self.reason if state in (QueryState.FAILED, QueryState.CANCELLED) else None
        return ExecutionStatus(state=state, reason=reason)

    async def get_results(self, handle):
        self.results_calls += 1
        return self.grid


def make_grid(header, *rows):
    return ResultGrid(column_names=list(header), rows=[list(header)] + [list(r) for r in rows])


# Tiny poll interval so tests don't sleep for real
@pytest.fixture
def athena_config():
    return AthenaConfig(
        region="us-east-1",
        database="project",
        catalog="AwsDataCatalog",
        workgroup="primary",
        output_location="s3://test-bucket/athena-results/",
        page_size=10,
        poll_interval=0,
        max_poll_attempts=30,
    )


@pytest.fixture
def fake_engine():
    return FakeEngine(
        grid=make_grid(
            ["title", "date"],
            ["A", "2021-01-01"],
            ["B", "2021-01-02"],
        )
    )


@pytest.fixture
def orchestrator(fake_engine, athena_config):
    return QueryOrchestrator(fake_engine, athena_config)


@pytest.fixture
def rejecting_engine():
    return FakeEngine(submit_error=SubmissionError("Failed to get QueryExecutionId"))


# Client
@pytest_asyncio.fixture(scope="function")
async def client(orchestrator: QueryOrchestrator):
    async def override_get_orchestrator():
        return orchestrator

    app.dependency_overrides[get_orchestrator] = override_get_orchestrator

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as ac:
        yield ac

    app.dependency_overrides.clear()
