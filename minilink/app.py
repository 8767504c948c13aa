import logging
import os
from contextlib import asynccontextmanager
from logging.handlers import TimedRotatingFileHandler
from typing import Optional

import uvicorn
from fastapi import FastAPI

from minilink.controller import router
from minilink.repository import URLStore

HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", 8080))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FILE = os.getenv("LOG_FILE")

# Logging
handlers: list[logging.Handler] = [logging.StreamHandler()]
if LOG_FILE:
    handlers.append(
        TimedRotatingFileHandler(
            filename=LOG_FILE,
            when="W0",
            interval=1,
            backupCount=4,
            encoding="utf-8",
        )
    )

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(levelname)s - %(asctime)s - %(message)s",
    handlers=handlers,
)
logger = logging.getLogger(__name__)


# App lifecycle
@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Application started, in-memory URL store initialized")
    yield
    logger.info(
        f"Application shut down, discarding {len(app.state.store)} URL mappings"
    )


def create_app(store: Optional[URLStore] = None) -> FastAPI:
    app = FastAPI(title="MiniLink - URL Shortener", lifespan=lifespan)
    app.state.store = store if store is not None else URLStore()
    app.include_router(router)
    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(app, host=HOST, port=PORT)
