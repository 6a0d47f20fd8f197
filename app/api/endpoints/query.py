from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from app.core import schemas
from app.core.config import settings
from app.core.engine import get_orchestrator
from app.core.query.orchestrator import QueryOrchestrator

router = APIRouter(prefix="/api", tags=["Query"])

orchestrator_dep = Annotated[QueryOrchestrator, Depends(get_orchestrator)]


@router.get(
    "/query",
    response_model=schemas.QueryResponse,
    status_code=status.HTTP_200_OK,
    responses={500: {"model": schemas.ErrorResponse}},
)
async def run_query(
    orchestrator: orchestrator_dep,
    offset: Annotated[int, Query(ge=0)] = 0,
):
    """
    Run the fixed query for one page of results.
    Errors are turned into {"error", "details"} by the app's QueryError handler.
    """
    page = await orchestrator.run_page(settings.QUERY_TEMPLATE, offset)
    return schemas.QueryResponse.from_page(page)
