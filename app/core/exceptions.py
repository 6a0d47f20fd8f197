"""Errors raised while running a query against the engine.

Every failure surfaces to the client as a single 500 response built from
``message`` and ``detail``; see ``app.main.query_error_handler``.
"""

from typing import Optional

from app.core.schemas import QueryState


class QueryError(Exception):
    """Base exception for every non-success path of a query run."""

    kind: str = "query"

    def __init__(self, message: str, detail: Optional[str] = None) -> None:
        self.message = message
        self.detail = detail
        super().__init__(message)


class SubmissionError(QueryError):
    """Engine rejected the query or returned no execution id."""

    kind = "submission"


class ExecutionError(QueryError):
    """Query reached FAILED or CANCELLED."""

    kind = "execution"

    def __init__(self, state: QueryState, reason: Optional[str] = None) -> None:
        self.state = state
        self.reason = reason
        super().__init__(f"Query {state.value}", reason)


class QueryTimeoutError(QueryError):
    """Poll attempts ran out before the query finished."""

    kind = "timeout"


class FetchError(QueryError):
    """Result set is missing its column descriptors or its rows."""

    kind = "fetch"


class TransportError(QueryError):
    """Network or SDK failure talking to the engine."""

    kind = "transport"


class TemplateError(QueryError):
    """QUERY_TEMPLATE could not be rendered for a page."""

    kind = "template"
