import logging
import os
from contextlib import asynccontextmanager
from fastapi import FastAPI
from tenbucks import exceptions
from tenbucks.database import init_database
from tenbucks.exception_handlers import club_exception_handler, lock_timeout_handler
from tenbucks.routers import (
    player_router,
    waitlist_router,
    season_router,
    session_router,
    match_router,
    results_router,
)

logging.basicConfig(
    level=os.environ.get("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

@asynccontextmanager
async def lifespan(app: FastAPI):
    init_database()
    yield


app = FastAPI(title="Ten Bucks Club", lifespan=lifespan)


app.add_exception_handler(exceptions.ClubError, club_exception_handler)
app.add_exception_handler(TimeoutError, lock_timeout_handler)

app.include_router(player_router.router)
app.include_router(waitlist_router.router)
app.include_router(season_router.router)
app.include_router(session_router.router)
app.include_router(results_router.router)
app.include_router(match_router.router)
