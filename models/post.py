from typing import List, Optional

from pydantic import BaseModel, field_validator


class TextRequest(BaseModel):
    text: str

    @field_validator("text")
    @classmethod
    def text_required(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("Text is required")
        return value


class PostRequest(TextRequest):
    pass


class CommentRequest(TextRequest):
    pass


class Like(BaseModel):
    user: str


class Comment(BaseModel):
    id: str
    user: str
    name: str
    avatar: Optional[str] = None
    text: str
    date: str


class Post(BaseModel):
    id: str
    user: str
    name: str
    avatar: Optional[str] = None
    text: str
    likes: List[Like] = []
    comments: List[Comment] = []
    date: str


class Message(BaseModel):
    msg: str
