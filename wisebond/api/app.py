"""FastAPI application entry point."""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from wisebond.api.routes import analysis, calculators, properties
from wisebond.config import settings

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title="WiseBond",
    description="Bond scenario analysis and home-loan calculators",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(analysis.router)
app.include_router(properties.router)
app.include_router(calculators.router)


@app.get("/health")
async def health():
    return {"status": "ok"}
