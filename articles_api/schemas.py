from typing import Annotated

from fastapi import Path
from pydantic import BaseModel, ConfigDict


# --- Article ---

class ArticleForm(BaseModel):
    """Request body for create and update; any client-supplied id is ignored."""
    title: str
    body: str


class ArticleResponse(BaseModel):
    id: int
    title: str
    body: str
    model_config = ConfigDict(from_attributes=True)


# --- Comment ---

class CommentForm(BaseModel):
    body: str


class CommentResponse(BaseModel):
    id: int
    body: str
    model_config = ConfigDict(from_attributes=True)


# --- Errors ---

class ErrorResponse(BaseModel):
    code: str
    message: str


# --- Health ---

class HealthResponse(BaseModel):
    status: str
    version: str


# --- Path parameters ---

# Range of the 32-bit ``id``/``article_id`` columns; anything outside it
# cannot name a stored row.
ID_MIN = -(2**31)
ID_MAX = 2**31 - 1

ResourceId = Annotated[int, Path(ge=ID_MIN, le=ID_MAX)]
