from __future__ import annotations

import logging

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .core.settings import get_settings
from .routes.charts import router as charts_router
from .routes.vibe import router as vibe_router
from .services.errors import VibeChartError

load_dotenv()

logging.basicConfig(
    level=get_settings().log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("vibechart.api")

app = FastAPI(title="vibechart API", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(vibe_router)
app.include_router(charts_router)


@app.exception_handler(VibeChartError)
async def handle_vibechart_error(request: Request, exc: VibeChartError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    else:
        logger.info("%s %s rejected: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=exc.status_code, content=exc.to_json())


@app.exception_handler(RequestValidationError)
async def handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
    paths = (".".join(str(part) for part in err.get("loc", ()) if part != "body") for err in exc.errors())
    fields = [path for path in paths if path]
    details = "invalid fields: " + ", ".join(fields) if fields else "request body could not be parsed"
    return JSONResponse(status_code=400, content={"error": "Malformed request", "details": details})


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}
