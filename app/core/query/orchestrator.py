import asyncio
import logging

from app.core.config import AthenaConfig
from app.core.exceptions import (
    ExecutionError,
    QueryError,
    QueryTimeoutError,
    TemplateError,
)
from app.core.query.athena import AthenaEngine
from app.core.query.shaper import shape
from app.core.schemas import (
    ExecutionStatus,
    PageResult,
    QueryExecutionHandle,
    QueryRequest,
)


# -----------------------------------------------------------------------------
# ORCHESTRATOR MODULE - submit -> poll -> fetch
# Purpose: run one page of the query end to end inside a single request
# Athena has no completion callback, so we poll on a fixed interval with a
# bounded number of attempts
# -----------------------------------------------------------------------------

logger = logging.getLogger(__name__)


class QueryOrchestrator:
    def __init__(self, engine: AthenaEngine, config: AthenaConfig):
        self.engine = engine
        self.config = config

    def build_request(self, query_text: str) -> QueryRequest:
        return QueryRequest(
            query_text=query_text,
            database=self.config.database,
            catalog=self.config.catalog,
            workgroup=self.config.workgroup,
            output_location=self.config.output_location,
            encryption_mode=self.config.encryption_mode,
        )

    async def wait_for_completion(self, handle: QueryExecutionHandle) -> ExecutionStatus:
        """
        Poll until SUCCEEDED.

        FAILED/CANCELLED raise right away without another poll.
        After max_poll_attempts non-terminal states we give up with a timeout.
        """
        attempts = self.config.max_poll_attempts

        for attempt in range(1, attempts + 1):
            status = await self.engine.get_status(handle)
            logger.debug(
                f"Query {handle.id} attempt {attempt}/{attempts}: {status.state.value}"
            )

            if status.is_error:
                raise ExecutionError(status.state, status.reason)

            if status.is_terminal:
                return status

            # Don't wait after the last poll, we are giving up anyway
            if attempt < attempts:
                await asyncio.sleep(self.config.poll_interval)

        raise QueryTimeoutError(
            "Query timed out",
            f"Query {handle.id} did not finish after {attempts} status checks",
        )

    async def run_query(self, query_text: str, offset: int = 0) -> PageResult:
        """
        Run the query and return one page of shaped records.

        Args:
            query_text: SQL already rendered for this page
            offset: page offset, echoed back to the client

        Returns:
            PageResult with has_more set when the page came back full
        """
        request = self.build_request(query_text)

        try:
            handle = await self.engine.submit(request)
        except QueryError as error:
            logger.error(f"Query submission failed ({error.kind}): {error}")
            raise
        logger.info(f"Submitted query {handle.id} (offset={offset})")

        try:
            await self.wait_for_completion(handle)
            grid = await self.engine.get_results(handle)
        except QueryError as error:
            logger.error(f"Query {handle.id} failed ({error.kind}): {error}")
            raise

        records = shape(grid)
        logger.info(f"Query {handle.id} returned {len(records)} records")

        return PageResult(
            records=records,
            offset=offset,
            has_more=len(records) == self.config.page_size,
        )

    async def run_page(self, template: str, offset: int = 0) -> PageResult:
        """Render the page template ({offset}, {limit}) and run it."""
        try:
            query_text = template.format(offset=offset, limit=self.config.page_size)
        except (IndexError, KeyError, ValueError) as error:
            # Literal braces in SQL must be doubled: {{2}}
            raise TemplateError("Invalid query template", str(error))
        return await self.run_query(query_text, offset)
