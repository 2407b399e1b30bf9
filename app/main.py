import logging

from fastapi import FastAPI

from app.api.routes import router

app = FastAPI(title="farm-session-bootstrap", version="0.1.0")
app.include_router(router)
# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


@app.get("/info")
async def info() -> dict[str, str]:
    return {"name": "farm-session-bootstrap", "version": "0.1.0"}
