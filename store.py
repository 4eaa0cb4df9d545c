import logging
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError

from db import movies_collection, users_collection
from utils.serialization import to_object_id

logger = logging.getLogger(__name__)


class NotFoundError(ValueError):
    pass


class ConflictError(ValueError):
    pass


# ---------------------------
# Movies
# ---------------------------

def list_movies(db):
    return list(movies_collection(db).find())


def get_movie_by_title(db, title):
    movie = movies_collection(db).find_one({"title": title})
    if not movie:
        raise NotFoundError("Movie not found")
    return movie


def get_genre(db, name):
    """
    Returns the genre object embedded in the first movie tagged with it.
    """
    movie = movies_collection(db).find_one({"genre.name": name})
    if not movie:
        raise NotFoundError("Genre not found")
    return movie["genre"]


def get_movies_by_director(db, name):
    # an unknown director and one without movies look the same here
    movies = list(movies_collection(db).find({"director.name": name}))
    if not movies:
        raise NotFoundError("Director not found")
    return movies


# ---------------------------
# Users
# ---------------------------

def get_user(db, username):
    user = users_collection(db).find_one({"username": username})
    if not user:
        raise NotFoundError("User not found")
    return user


def _with_object_ids(fields):
    if fields.get("favoriteMovies") is not None:
        # $addToSet semantics on insert: keep first occurrence of each id
        ids = []
        for movie_id in fields["favoriteMovies"]:
            oid = to_object_id(movie_id)
            if oid not in ids:
                ids.append(oid)
        fields["favoriteMovies"] = ids
    return fields


def create_user(db, fields):
    """
    Registers a user from the given fields.

    The existence check and the insert are two round-trips; the unique
    index on username catches a concurrent registration that slips
    between them.
    """
    users = users_collection(db)
    if users.find_one({"username": fields["username"]}):
        raise ConflictError("Username already exists")

    document = _with_object_ids(dict(fields))
    document.setdefault("favoriteMovies", [])
    try:
        result = users.insert_one(document)
    except DuplicateKeyError:
        raise ConflictError("Username already exists")
    document["_id"] = result.inserted_id
    return document


def update_user(db, username, fields):
    fields = _with_object_ids(dict(fields))
    if not fields:
        return get_user(db, username)

    user = users_collection(db).find_one_and_update(
        {"username": username},
        {"$set": fields},
        return_document=ReturnDocument.AFTER,
    )
    if not user:
        raise NotFoundError("User not found")
    return user


def add_favorite(db, username, movie_id):
    user = users_collection(db).find_one_and_update(
        {"username": username},
        {"$addToSet": {"favoriteMovies": to_object_id(movie_id)}},
        return_document=ReturnDocument.AFTER,
    )
    if not user:
        raise NotFoundError("User not found")
    return user


def remove_favorite(db, username, movie_id):
    user = users_collection(db).find_one_and_update(
        {"username": username},
        {"$pull": {"favoriteMovies": to_object_id(movie_id)}},
        return_document=ReturnDocument.AFTER,
    )
    if not user:
        raise NotFoundError("User not found")
    return user


def delete_user(db, username):
    user = users_collection(db).find_one_and_delete({"username": username})
    if not user:
        raise NotFoundError("User not found")
    return user
