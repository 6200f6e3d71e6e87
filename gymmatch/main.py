from fastapi import FastAPI

from gymmatch.config import settings
from gymmatch.log import configure_logging
from gymmatch.matching.router import router as matching_router

configure_logging(settings.log_level)

app = FastAPI(title="GymMatch", version="1.0.0")
app.include_router(matching_router)


@app.get("/")
async def root() -> dict:
    return {
        "status": "ok",
        "docs": "/docs",
        "health": "/health",
        "matching": {
            "config": "/matching/config",
            "catalog": "/matching/catalog",
            "score": "/matching/score",
            "discover": "/matching/discover/{user_id}",
        },
    }


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}
