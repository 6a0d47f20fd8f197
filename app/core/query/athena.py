# app/core/query/athena.py
"""
ATHENA MODULE - Talk to the query engine

Purpose:
    1. Start a query execution (StartQueryExecution)
    2. Read its current state (GetQueryExecution)
    3. Read its result set (GetQueryResults)
    4. Convert SDK responses and SDK errors into our own types

boto3 is blocking, so every call runs in a worker thread through
asyncio.to_thread and the event loop stays free while AWS answers.

Data Flow:
    QueryRequest -> submit() -> handle -> get_status() -> get_results() -> ResultGrid
"""

import asyncio
import logging
from typing import Any, Dict, List, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from app.core.exceptions import FetchError, SubmissionError, TransportError
from app.core.schemas import (
    ExecutionStatus,
    QueryExecutionHandle,
    QueryRequest,
    QueryState,
    ResultGrid,
)

logger = logging.getLogger(__name__)


def create_athena_client(region: str):
    """Credentials come from the default AWS chain (env, profile, IAM role)."""
    return boto3.client("athena", region_name=region)


def _client_error_message(error: ClientError) -> str:
    err = error.response.get("Error", {})
    return err.get("Message") or err.get("Code") or str(error)


class AthenaEngine:
    """Thin async wrapper over a boto3 Athena client."""

    def __init__(self, client):
        self.client = client

    async def _call(self, operation: str, **params) -> Dict[str, Any]:
        method = getattr(self.client, operation)
        try:
            return await asyncio.to_thread(method, **params)
        except BotoCoreError as error:
            logger.error(f"Athena {operation} transport failure: {error}")
            raise TransportError(f"Athena {operation} failed", str(error))

    # ============================================================================
    # SUBMIT
    # ============================================================================

    async def submit(self, request: QueryRequest) -> QueryExecutionHandle:
        """
        Start the query and return its execution handle.

        Raises:
            SubmissionError: the engine rejected the query or sent back no id
            TransportError: the call itself failed
        """
        result_configuration: Dict[str, Any] = {
            "OutputLocation": request.output_location
        }
        if request.encryption_mode is not None:
            result_configuration["EncryptionConfiguration"] = {
                "EncryptionOption": request.encryption_mode.value
            }

        try:
            response = await self._call(
                "start_query_execution",
                QueryString=request.query_text,
                QueryExecutionContext={
                    "Database": request.database,
                    "Catalog": request.catalog,
                },
                ResultConfiguration=result_configuration,
                WorkGroup=request.workgroup,
            )
        except ClientError as error:
            raise SubmissionError(
                "Failed to start query execution", _client_error_message(error)
            )

        execution_id = response.get("QueryExecutionId")
        if not execution_id:
            raise SubmissionError("Failed to get QueryExecutionId")

        return QueryExecutionHandle(id=execution_id)

    # ============================================================================
    # POLL
    # ============================================================================

    async def get_status(self, handle: QueryExecutionHandle) -> ExecutionStatus:
        try:
            response = await self._call(
                "get_query_execution", QueryExecutionId=handle.id
            )
        except ClientError as error:
            raise TransportError(
                "Failed to get query status", _client_error_message(error)
            )

        status = response.get("QueryExecution", {}).get("Status", {})
        state = status.get("State")
        if not state:
            raise TransportError("Failed to get query status")

        try:
            query_state = QueryState(state)
        except ValueError:
            raise TransportError("Failed to get query status", f"Unknown state {state}")

        return ExecutionStatus(state=query_state, reason=status.get("StateChangeReason"))

    # ============================================================================
    # FETCH
    # ============================================================================

    async def get_results(self, handle: QueryExecutionHandle) -> ResultGrid:
        """
        Read the first page of results.

        Column names come from ResultSetMetadata.ColumnInfo, cells from
        Rows[].Data[].VarCharValue (None when Athena sends a NULL).
        """
        try:
            response = await self._call(
                "get_query_results", QueryExecutionId=handle.id
            )
        except ClientError as error:
            raise TransportError(
                "Failed to get query results", _client_error_message(error)
            )

        result_set = response.get("ResultSet") or {}
        column_info = (result_set.get("ResultSetMetadata") or {}).get("ColumnInfo")
        raw_rows = result_set.get("Rows")

        if column_info is None or raw_rows is None:
            raise FetchError("Invalid query results format")

        column_names = [column.get("Name") or "" for column in column_info]
        rows: List[List[Optional[str]]] = [
            [cell.get("VarCharValue") for cell in row.get("Data", [])]
            for row in raw_rows
        ]

        return ResultGrid(column_names=column_names, rows=rows)
