import logging
import os

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from rxparse.api.routes_combinations import router as combinations_router
from rxparse.api.routes_parse import router as parse_router
from rxparse.api.routes_rules import router as rules_router
from rxparse.core.env import load_env
from rxparse.db.db_config import StoreError

load_env()
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title="Prescription Parser (heuristic + AI)", version="1.0")

app.include_router(parse_router)
app.include_router(rules_router)
app.include_router(combinations_router)

@app.exception_handler(StoreError)
async def store_error_handler(request: Request, exc: StoreError):
    return JSONResponse(status_code=500, content={"detail": str(exc)})

@app.get("/health")
def health():
    return {"ok": True}

@app.get("/")
def root():
    return {"ok": True, "service": "Prescription Parser (heuristic + AI)"}
