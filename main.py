import logging
import time
from contextlib import asynccontextmanager
from typing import List

import uvicorn
from fastapi import FastAPI, HTTPException, Depends, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from config import CORS_ORIGINS, HOST, PORT
from db import client, db as default_db, get_db, ensure_indexes, ping
from logging_config import setup_logging
from models import Movie, Genre
from store import NotFoundError, list_movies, get_movie_by_title, get_genre, get_movies_by_director
from users import users_router
from utils.serialization import serialize_document

setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if ensure_indexes(default_db):
        logger.info("MongoDB indexes ensured")
    yield
    client.close()


app = FastAPI(
    title="🎬 Movie API",
    description="Movie catalogue and user favorites backed by MongoDB",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.time()
    status_code = 500
    try:
        response = await call_next(request)
        status_code = response.status_code
        return response
    finally:
        elapsed_ms = (time.time() - start) * 1000
        logger.info(f"{request.method} {request.url.path} {status_code} {elapsed_ms:.1f}ms")


@app.exception_handler(Exception)
async def unhandled_exception(request: Request, exc: Exception):
    # only reached by failures outside a route's own try block
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=exc)
    return PlainTextResponse("Something went wrong! Please try again later.", status_code=500)


app.include_router(users_router)

# -------------------------------
# General Routes
# -------------------------------

@app.get("/")
def root():
    return {"message": "Welcome to the Movie API!"}


@app.get("/health")
def health(db=Depends(get_db)):
    return {"status": "ok", "database": "up" if ping(db) else "down"}

# -------------------------------
# Movie Routes
# -------------------------------

@app.get("/movies", response_model=List[Movie])
def get_all_movies(db=Depends(get_db)):
    try:
        movies = list_movies(db)
    except Exception as e:
        logger.error(f"Error listing movies: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))
    return serialize_document(movies)


@app.get("/movies/{title}", response_model=Movie)
def get_movie(title: str, db=Depends(get_db)):
    try:
        movie = get_movie_by_title(db, title)
    except NotFoundError as e:
        logger.warning(f"Movie not found: {title}")
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        logger.error(f"Error fetching movie {title}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))
    return serialize_document(movie)


@app.get("/genres/{name}", response_model=Genre)
def get_genre_by_name(name: str, db=Depends(get_db)):
    logger.debug(f"Looking for genre: {name}")
    try:
        genre = get_genre(db, name)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        logger.error(f"Error fetching genre {name}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))
    return serialize_document(genre)


@app.get("/directors/{name}", response_model=List[Movie])
def get_director_movies(name: str, db=Depends(get_db)):
    logger.debug(f"Received request for director: {name}")
    try:
        movies = get_movies_by_director(db, name)
    except NotFoundError as e:
        logger.warning(f"Director {name} not found in database.")
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        logger.error(f"Error fetching director: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))
    return serialize_document(movies)


if __name__ == "__main__":
    uvicorn.run("main:app", host=HOST, port=PORT)
