import logging
import uuid
from datetime import datetime, timezone
from typing import List, Dict, Any

import bleach

from models.user import User, UserProfile
from services.exceptions import (
    AlreadyLiked,
    CommentNotFound,
    EmptyText,
    NotAuthorized,
    NotLiked,
    PostNotFound,
)
from services.firestore import FirestoreDB

logger = logging.getLogger("app.posts")


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _clean_text(text: str) -> str:
    cleaned = bleach.clean(text or "", strip=True)
    if not cleaned.strip():
        raise EmptyText(value=text)
    return cleaned


class PostService:
    """
    Post mutations on behalf of an explicit caller.

    Likes and comments are embedded arrays on the post document; every
    mutation reads the post, edits the array in memory and writes it back.
    Concurrent writers on the same post are last-write-wins.
    """

    def __init__(self, db: FirestoreDB):
        self.db = db

    def get_profile(self, caller: User) -> UserProfile:
        """
        Resolve the caller's display name and avatar, preferring the
        stored profile over the token claims
        """
        user_data = self.db.get_user(caller.user_id) or {}
        return UserProfile(
            id=caller.user_id,
            email=user_data.get("email", caller.email),
            name=user_data.get("name") or caller.name or "Unknown",
            avatar=user_data.get("avatar", caller.picture),
        )

    def _find_post(self, post_id: str) -> Dict[str, Any]:
        post = self.db.get_post(post_id)
        if post is None:
            logger.warning("Post %s not found", post_id)
            raise PostNotFound()
        post.setdefault("likes", [])
        post.setdefault("comments", [])
        return post

    def create(self, caller: User, text: str) -> Dict[str, Any]:
        text = _clean_text(text)
        profile = self.get_profile(caller)

        post = {
            "user": caller.user_id,
            "name": profile.name,
            "avatar": profile.avatar,
            "text": text,
            "likes": [],
            "comments": [],
            "date": _now(),
        }
        post["id"] = self.db.create_post(dict(post))

        logger.info("User %s created post %s", caller.user_id, post["id"])
        return post

    def list(self, caller: User) -> List[Dict[str, Any]]:
        return self.db.get_all_posts()

    def get(self, caller: User, post_id: str) -> Dict[str, Any]:
        return self._find_post(post_id)

    def delete(self, caller: User, post_id: str):
        post = self._find_post(post_id)
        if post["user"] != caller.user_id:
            logger.warning("User %s may not delete post %s", caller.user_id, post_id)
            raise NotAuthorized()

        self.db.delete_post(post_id)
        logger.info("User %s deleted post %s", caller.user_id, post_id)

    def like(self, caller: User, post_id: str) -> List[Dict[str, Any]]:
        post = self._find_post(post_id)
        likes = post["likes"]
        if any(like["user"] == caller.user_id for like in likes):
            raise AlreadyLiked()

        likes.insert(0, {"user": caller.user_id})
        self.db.update_likes(post_id, likes)

        logger.info("User %s liked post %s", caller.user_id, post_id)
        return likes

    def unlike(self, caller: User, post_id: str) -> List[Dict[str, Any]]:
        post = self._find_post(post_id)
        likes = post["likes"]
        remaining = [like for like in likes if like["user"] != caller.user_id]
        if len(remaining) == len(likes):
            raise NotLiked()

        self.db.update_likes(post_id, remaining)

        logger.info("User %s unliked post %s", caller.user_id, post_id)
        return remaining

    def add_comment(self, caller: User, post_id: str, text: str) -> List[Dict[str, Any]]:
        text = _clean_text(text)
        post = self._find_post(post_id)
        profile = self.get_profile(caller)

        comment = {
            "id": uuid.uuid4().hex,
            "user": caller.user_id,
            "name": profile.name,
            "avatar": profile.avatar,
            "text": text,
            "date": _now(),
        }
        comments = post["comments"]
        comments.insert(0, comment)
        self.db.update_comments(post_id, comments)

        logger.info("User %s commented %s on post %s", caller.user_id, comment["id"], post_id)
        return comments

    def delete_comment(self, caller: User, post_id: str, comment_id: str) -> List[Dict[str, Any]]:
        post = self._find_post(post_id)
        comments = post["comments"]

        comment = next((c for c in comments if c.get("id") == comment_id), None)
        if comment is None:
            logger.warning("Comment %s not found on post %s", comment_id, post_id)
            raise CommentNotFound()

        if comment["user"] != caller.user_id:
            logger.warning("User %s may not delete comment %s", caller.user_id, comment_id)
            raise NotAuthorized()

        remaining = [c for c in comments if c.get("id") != comment_id]
        self.db.update_comments(post_id, remaining)

        logger.info("User %s deleted comment %s on post %s", caller.user_id, comment_id, post_id)
        return remaining
