from contextlib import asynccontextmanager
import logging
import os

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import uvicorn

# Load .env variables
load_dotenv()

logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO").upper())
logger = logging.getLogger("app")

from app.routers import (
    auth,
    users,
    trips,
    trip_registrations,
    destinations,
    guides,
    logs,
)
from app.database import engine, Base, SessionLocal
from app.exceptions import AppError
from app.init_db import create_initial_admin
from app import models  # noqa: F401


@asynccontextmanager
async def lifespan(app: FastAPI):
    Base.metadata.create_all(bind=engine)

    logger.info("Initializing database with admin user...")
    db = SessionLocal()
    try:
        create_initial_admin(db)
    finally:
        db.close()
    yield


app = FastAPI(
    title="Travel API",
    description="API for browsing trips, destinations and guides and booking trips",
    version="1.0.0",
    lifespan=lifespan,
)


def _cors_origins():
    raw = os.getenv("CORS_ORIGINS", "*")
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(auth.router, prefix="/auth", tags=["authentication"])
app.include_router(users.router, prefix="/users", tags=["users"])
app.include_router(trips.router, prefix="/trips", tags=["trips"])
app.include_router(
    trip_registrations.router,
    prefix="/trip-registrations",
    tags=["trip-registrations"],
)
app.include_router(destinations.router, prefix="/destinations", tags=["destinations"])
app.include_router(guides.router, prefix="/guides", tags=["guides"])
app.include_router(logs.router, prefix="/logs", tags=["logs"])


@app.get("/")
def read_root():
    return {"message": "Welcome to Travel API"}


@app.get("/health")
def health():
    return {"status": "ok"}


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
        headers=exc.headers,
    )


# Global unhandled exception handler -> logs ERROR, hides internals from the client
@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(
        "Unhandled error | path=%s | method=%s | client=%s",
        request.url.path,
        request.method,
        request.client.host if request.client else "unknown",
    )
    return JSONResponse(status_code=500, content={"detail": "Internal Server Error"})


if __name__ == "__main__":
    uvicorn.run("app.main:app", host="0.0.0.0", port=8000, reload=True)
