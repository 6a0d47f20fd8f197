from fastapi import Request

from app.core.config import AthenaConfig, settings
from app.core.query.athena import AthenaEngine, create_athena_client
from app.core.query.orchestrator import QueryOrchestrator

# Built once from the environment, then passed around explicitly
athena_config = AthenaConfig.from_settings(settings)


def open_client():
    """Create the Athena client that lives as long as the app does."""
    return create_athena_client(athena_config.region)


# This is the "Bridge" that gives my routes access to Athena
async def get_orchestrator(request: Request) -> QueryOrchestrator:
    engine = AthenaEngine(request.app.state.athena_client)
    return QueryOrchestrator(engine, athena_config)
