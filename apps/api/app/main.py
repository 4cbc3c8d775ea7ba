import os
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.infrastructure.storage import connection as storage
from app.interfaces.api.routers import auth, system, users

LEGACY_USER_ENDPOINTS = os.environ.get("LEGACY_USER_ENDPOINTS", "true").lower() in (
    "1",
    "true",
    "yes",
)
HOST = os.environ.get("HOST", "0.0.0.0")
PORT = int(os.environ.get("PORT", "3001"))


@asynccontextmanager
async def lifespan(_: FastAPI):
    storage.init_store()
    try:
        yield
    finally:
        storage.close_store()


app = FastAPI(title="Ninofi API", version="0.1.0", lifespan=lifespan)

frontend_origins = [
    origin.strip()
    for origin in os.environ.get("FRONTEND_ORIGIN", "*").split(",")
    if origin.strip()
]
app.add_middleware(
    CORSMiddleware,
    allow_origins=frontend_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)


app.include_router(system.router)
app.include_router(auth.router)
if LEGACY_USER_ENDPOINTS:
    app.include_router(users.router)


def run() -> None:
    uvicorn.run(app, host=HOST, port=PORT)


if __name__ == "__main__":
    run()
