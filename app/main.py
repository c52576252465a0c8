import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.core.config import settings
from app.routers import places
from app.services.feed_service import FeedQueryError

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.project_name,
    version="1.0.0",
)

# The swipe UI is served from a different origin
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins,
    allow_methods=["GET"],
    allow_headers=["*"],
)

app.include_router(places.router, prefix=settings.api_prefix)


@app.exception_handler(FeedQueryError)
async def feed_query_error_handler(request: Request, exc: FeedQueryError) -> JSONResponse:
    """Return 400 with {"error": message} for bad feed parameters."""
    logger.info(f"Rejected {request.url.path}: {exc}")
    return JSONResponse(status_code=400, content={"error": str(exc)})


@app.get("/")
def root():
    """Root endpoint."""
    return {
        "message": "Welcome to Restaurant Swipe API",
        "version": "1.0.0",
        "docs": "/docs"
    }


@app.get("/health")
def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host="0.0.0.0", port=settings.port)
