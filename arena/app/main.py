import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from arena.app.api.moves import router as moves_router
from arena.app.core.preset_registry import registry
from arena.app.core.settings import configure_logging, settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    logger.info(
        "Engine ready: default depth %d, presets %s",
        settings.default_depth, ", ".join(registry.list_all()),
    )
    yield


app = FastAPI(title="Connect Four Minimax Engine", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:5173", "http://localhost:3000"],  # Vite (5173) and React default (3000)
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(moves_router, tags=["Engine"])


@app.get("/health")
async def health():
    return {"status": "ok"}
