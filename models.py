# models.py
from pydantic import BaseModel, ConfigDict, Field
from typing import Any, List, Optional


class Document(BaseModel):
    # documents are pass-through: unknown keys are kept
    model_config = ConfigDict(extra="allow", populate_by_name=True)


class Genre(Document):
    name: str
    description: Optional[Any] = None


class Director(Document):
    name: str
    bio: Optional[Any] = None
    birth: Optional[Any] = None
    death: Optional[Any] = None


class Movie(Document):
    # movies are loaded outside this API, so nothing here is enforced
    id: Optional[Any] = Field(None, alias="_id")
    title: Optional[Any] = None
    description: Optional[Any] = None
    genre: Optional[Any] = None
    director: Optional[Any] = None
    imagePath: Optional[Any] = None
    featured: Optional[Any] = None
    year: Optional[Any] = None


class UserCreate(Document):
    username: str
    password: Optional[Any] = None
    email: Optional[Any] = None
    birthday: Optional[Any] = None
    favoriteMovies: List[str] = Field(default_factory=list)


class UserUpdate(Document):
    username: Optional[str] = None
    password: Optional[Any] = None
    email: Optional[Any] = None
    birthday: Optional[Any] = None
    favoriteMovies: Optional[List[str]] = None


class User(Document):
    id: Optional[Any] = Field(None, alias="_id")
    username: str
    password: Optional[Any] = None
    email: Optional[Any] = None
    birthday: Optional[Any] = None
    favoriteMovies: List[str] = Field(default_factory=list)


class Message(BaseModel):
    message: str
