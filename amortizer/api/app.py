"""FastAPI application entry point."""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from amortizer.api.routes import schedule, suggestions
from amortizer.config import settings

logging.basicConfig(level=settings.log_level)

app = FastAPI(
    title="Loan Amortizer",
    description="Home loan amortization schedules with fixed and floating rates",
    version="0.1.0",
    debug=settings.debug,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(schedule.router)
app.include_router(suggestions.router)


@app.get("/health")
async def health():
    return {"status": "ok"}
