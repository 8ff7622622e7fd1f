"""FastAPI application for the withdrawal planner.

Planning is synchronous and stateless; each request carries its own position
and pool snapshot.
"""

import os

import uvicorn
from fastapi import FastAPI

from lp_adapter import __version__
from lp_adapter.api.endpoints import router

# Configuration from environment variables with sensible defaults
HOST = os.environ.get("ADAPTER_HOST", "0.0.0.0")
PORT = int(os.environ.get("ADAPTER_PORT", "8000"))
DEBUG = os.environ.get("ADAPTER_DEBUG", "false").lower() in ("true", "1", "yes")

app = FastAPI(
    title="LP Adapter",
    description="Withdrawal planning for gauge-staked Balancer positions",
    version=__version__,
)

app.include_router(router)


@app.get("/health")
async def health() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "ok"}


def run() -> None:
    """Run the API server.

    Configuration via environment variables:
    - ADAPTER_HOST: Host to bind to (default: 0.0.0.0)
    - ADAPTER_PORT: Port to bind to (default: 8000)
    - ADAPTER_DEBUG: Enable reload mode (default: false)
    """
    uvicorn.run(
        "lp_adapter.api.main:app",
        host=HOST,
        port=PORT,
        reload=DEBUG,
    )


if __name__ == "__main__":
    run()
