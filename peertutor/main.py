# peertutor/main.py
# Run with: uvicorn peertutor.main:app --reload  (pip install -e ".[serve]")

from contextlib import asynccontextmanager

from fastapi import FastAPI

from .config import configure_logging
from .db import create_db_and_tables
from .routers import admin_routes, auth_routes, students_routes, tutors_routes


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    create_db_and_tables()
    yield


app = FastAPI(title="Peer Tutoring Scheduler", lifespan=lifespan)

app.include_router(auth_routes.router)
app.include_router(tutors_routes.router)
app.include_router(students_routes.router)
app.include_router(admin_routes.router)


@app.get("/health")
def health_check():
    return {"status": "ok"}
