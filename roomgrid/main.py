# roomgrid/main.py
import time
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from roomgrid.config import settings
from roomgrid.logging_config import setup_logging
from roomgrid.routers import allocation, loads, schedule


setup_logging()
logger = logging.getLogger("roomgrid")


app = FastAPI(title="Room Allocation & Teaching Loads", version="1.0.0")


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.time()
    try:
        response = await call_next(request)
        ms = int((time.time() - start) * 1000)
        logger.info("%s %s -> %s (%dms)", request.method, request.url.path, response.status_code, ms)
        return response
    except Exception:
        ms = int((time.time() - start) * 1000)
        logger.exception("Unhandled error %s %s (%dms)", request.method, request.url.path, ms)
        raise


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routers
app.include_router(schedule.router)
app.include_router(allocation.router)
app.include_router(loads.router)


@app.get("/")
def root():
    return {"message": "Room allocation backend is running!"}
