import asyncio
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from app.core.config import settings
from app.core.engine import open_client
from app.core.exceptions import QueryError
from app.core.schemas import ErrorResponse
from app.api.router import api_router

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


# One Athena client for the whole process, closed on shutdown
@asynccontextmanager
async def lifespan(app: FastAPI):
    # boto3 resolves credentials and endpoints on creation, keep it off the loop
    app.state.athena_client = await asyncio.to_thread(open_client)
    logger.info(f"Athena client ready for region {settings.AWS_REGION}")

    yield
    app.state.athena_client.close()


app = FastAPI(title="Athena Data Viewer", lifespan=lifespan)


# Every failed query becomes a single 500 with {"error", "details"}
@app.exception_handler(QueryError)
async def query_error_handler(request: Request, exc: QueryError):
    logger.error(f"Athena query error [{exc.kind}]: {exc.message} {exc.detail or ''}")
    body = ErrorResponse(error=exc.message, details=exc.detail)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=body.model_dump(),
    )


# Anything else still answers with the same JSON shape so the page can show it
@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    logger.exception(f"Unexpected error on {request.url.path}: {exc}")
    body = ErrorResponse(error="An error occurred", details=str(exc) or None)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=body.model_dump(),
    )


# Include the master router containing all our endpoints
app.include_router(api_router)
