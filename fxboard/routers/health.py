from fastapi import APIRouter, Depends

from fxboard.core.config import Settings, app_settings

router = APIRouter(tags=["health"])


@router.get("/health", summary="Liveness probe")
async def health(settings: Settings = Depends(app_settings)):
    return {"status": "ok", "version": settings.version}
