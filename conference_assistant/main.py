# Run from project root: uvicorn conference_assistant.main:app --port 8082

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.concurrency import run_in_threadpool

from conference_assistant.api.routes import router
from conference_assistant.core.config import APP_PORT, INGEST_ON_STARTUP
from conference_assistant.core.errors import ServiceUnavailableError
from conference_assistant.mcp.server import mcp_router
from conference_assistant.services.ingestion_service import ingest_sessions

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI):
    if INGEST_ON_STARTUP:
        try:
            await run_in_threadpool(ingest_sessions)
        except ServiceUnavailableError as e:
            logger.warning("Session ingestion skipped: %s", e.message)
    yield


app = FastAPI(title="JFall Conference Assistant", lifespan=lifespan)
app.include_router(router)
app.include_router(mcp_router, prefix="/mcp")


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=APP_PORT)
