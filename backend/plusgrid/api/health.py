from __future__ import annotations

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from plusgrid import olc


router = APIRouter(tags=["health"])

# Known location and its 10 digit code; a mismatch means a broken build.
_PROBE_LATITUDE = 47.365590
_PROBE_LONGITUDE = 8.524997
_PROBE_CODE = "8FVC9G8F+6X"


@router.get("/healthz")
async def healthz() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/readyz")
async def readyz() -> JSONResponse:
    # Readiness: the engine must reproduce a known code and decode it back.
    code = olc.encode(_PROBE_LATITUDE, _PROBE_LONGITUDE)
    if code != _PROBE_CODE or olc.decode(code) is None:
        return JSONResponse(status_code=503, content={"status": "not_ready"})
    return JSONResponse(status_code=200, content={"status": "ready"})
