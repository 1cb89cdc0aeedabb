# Run from project root: uvicorn conference_assistant.mcp.main:app --port 8081

import logging

import uvicorn
from fastapi import FastAPI

from conference_assistant.core.config import MCP_PORT
from conference_assistant.mcp.server import mcp_router

logging.basicConfig(level=logging.INFO)


app = FastAPI(title="JFall Conference MCP Server")
app.include_router(mcp_router)


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=MCP_PORT)
