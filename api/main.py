import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from prevhub import __version__
from prevhub.errors import InvalidDateError

from .compliance import router as compliance_router
from .obligations import router as obligations_router

logger = logging.getLogger(__name__)

app = FastAPI(
    title="PREV'HUB compliance API",
    version=__version__,
    description="HTTP layer over the deadline classifier, summaries and alerts.",
)

# --- CORS ----------------------------------------------------------
# Dev-only origins for the dashboard front-end.
origins = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "Accept"],
)

app.include_router(compliance_router)
app.include_router(obligations_router)


# ---------- invalid dates ----------
@app.exception_handler(InvalidDateError)
async def invalid_date_handler(request: Request, exc: InvalidDateError):
    logger.warning(f"Invalid date on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=422,
        content={"detail": "données de date invalides", "value": str(exc.value)},
    )


# ---------- health-check ----------
@app.get("/")
def root():
    return {"status": "ok", "msg": "PREV'HUB compliance API is alive"}
