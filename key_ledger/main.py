"""
Key Ledger — FastAPI Application.

This is the entry point for the application.
All routers are registered here.
"""

import uvicorn
from fastapi import FastAPI

from key_ledger.config import get_settings
from key_ledger.api.health import router as health_router
from key_ledger.api.keys import router as keys_router
from key_ledger.api.logs import router as logs_router

settings = get_settings()

app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Tracks physical keys and who has them",
    debug=settings.DEBUG,
)

# Register routers
app.include_router(health_router)
app.include_router(keys_router)
app.include_router(logs_router)


def run() -> None:
    """Serve the application with uvicorn."""
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    run()
