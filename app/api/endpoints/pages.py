from pathlib import Path

from fastapi import APIRouter
from fastapi.responses import FileResponse

from app.core.engine import athena_config

router = APIRouter(tags=["Pages"])

TEMPLATES_DIR = Path(__file__).resolve().parents[2] / "templates"


# Data viewer page, it talks to /api/query from the browser
@router.get("/", response_class=FileResponse)
async def viewer_page():
    return FileResponse(TEMPLATES_DIR / "index.html")


@router.get("/health")
async def health_check():
    """Liveness check, does not call Athena."""
    return {
        "status": "healthy",
        "region": athena_config.region,
        "workgroup": athena_config.workgroup,
    }
