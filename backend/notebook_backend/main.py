# notebook_backend – task dependency API for the research notebook
# ---------------------------------------------------------------
from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from dotenv import load_dotenv

# .env must be loaded before the config object is built
load_dotenv()

from fastapi import FastAPI  # noqa: E402
from fastapi.middleware.cors import CORSMiddleware  # noqa: E402
from prometheus_client import make_asgi_app  # noqa: E402

from notebook_backend.api.task_dependencies import router as dependency_router  # noqa: E402
from notebook_backend.config import config  # noqa: E402
from notebook_backend.db import engine, init_db  # noqa: E402

logging.basicConfig(
    level=config.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


# ──────────────── FastAPI + startup ─────────────────────────
@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db(engine)
    yield


app = FastAPI(lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=[config.frontend_origin],
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(dependency_router)

if not config.disable_metrics:
    metrics_app = make_asgi_app()
    app.mount("/metrics", metrics_app)


@app.get("/health")
def health():
    return {"status": "alive"}


# run dev server
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="127.0.0.1", port=8000)
