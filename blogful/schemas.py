"""
Request bodies.

Every field is optional here on purpose: the routers check required fields
themselves so that each missing one is reported by name with a 400, rather
than as a generic schema failure.
"""
from datetime import datetime

from pydantic import BaseModel


# --- Article ---

class ArticleCreate(BaseModel):
    title: str | None = None
    content: str | None = None
    style: str | None = None


class ArticleUpdate(BaseModel):
    title: str | None = None
    style: str | None = None
    content: str | None = None


# --- Comment ---

class CommentCreate(BaseModel):
    text: str | None = None
    article_id: int | None = None
    user_id: int | None = None
    date_commented: datetime | None = None


class CommentUpdate(BaseModel):
    text: str | None = None
    date_commented: datetime | None = None


# --- User ---

class UserCreate(BaseModel):
    fullname: str | None = None
    username: str | None = None
    nickname: str | None = None
    password: str | None = None


class UserUpdate(BaseModel):
    fullname: str | None = None
    username: str | None = None
    nickname: str | None = None
    password: str | None = None
