# users.py

import logging
from fastapi import APIRouter, HTTPException, Depends, status

from db import get_db
from models import UserCreate, UserUpdate, User, Message
from store import (
    NotFoundError,
    ConflictError,
    get_user,
    create_user,
    update_user,
    add_favorite,
    remove_favorite,
    delete_user,
)
from utils.serialization import serialize_document

logger = logging.getLogger(__name__)
users_router = APIRouter(prefix="/users", tags=["Users"])

# -----------------------------
# Routes
# -----------------------------

@users_router.post("", response_model=User, status_code=status.HTTP_201_CREATED)
def register(user: UserCreate, db=Depends(get_db)):
    try:
        created = create_user(db, user.model_dump(exclude_unset=True))
    except ConflictError as e:
        logger.warning(f"Registration rejected for {user.username}: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Error registering user {user.username}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))
    logger.info(f"Registered user {user.username}")
    return serialize_document(created)


@users_router.get("/{username}", response_model=User)
def read_user(username: str, db=Depends(get_db)):
    try:
        user = get_user(db, username)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        logger.error(f"Error fetching user {username}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))
    return serialize_document(user)


@users_router.put("/{username}", response_model=User)
def update(username: str, fields: UserUpdate, db=Depends(get_db)):
    try:
        user = update_user(db, username, fields.model_dump(exclude_unset=True))
    except NotFoundError as e:
        logger.warning(f"Update for unknown user {username}")
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        logger.error(f"Error updating user {username}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))
    logger.info(f"Updated user {username}")
    return serialize_document(user)


@users_router.post("/{username}/movies/{movie_id}", response_model=User)
def add_favorite_movie(username: str, movie_id: str, db=Depends(get_db)):
    logger.debug(f"Adding movie {movie_id} to favorites of {username}")
    try:
        user = add_favorite(db, username, movie_id)
    except NotFoundError as e:
        logger.warning(f"User {username} not found")
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        logger.error(f"Error updating user {username}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))
    return serialize_document(user)


@users_router.delete("/{username}/movies/{movie_id}", response_model=User)
def remove_favorite_movie(username: str, movie_id: str, db=Depends(get_db)):
    logger.debug(f"Removing movie {movie_id} from favorites of {username}")
    try:
        user = remove_favorite(db, username, movie_id)
    except NotFoundError as e:
        logger.warning(f"User {username} not found")
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        logger.error(f"Error deleting movie from favorites of {username}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))
    return serialize_document(user)


@users_router.delete("/{username}", response_model=Message)
def deregister(username: str, db=Depends(get_db)):
    try:
        delete_user(db, username)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        logger.error(f"Error deleting user {username}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))
    logger.info(f"Deleted user {username}")
    return {"message": f"User {username} deleted"}
