import logging

from fastapi import FastAPI

from dictation_polish.config import LOG_LEVEL
from dictation_polish.routers import polish

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Dictation Polish",
    description="Polishes dictated radiology report text into findings and impression",
    version="0.1.0",
)

app.include_router(polish.router)


@app.get("/health")
async def health():
    return {"status": "ok"}
