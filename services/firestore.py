import logging
import re
from typing import List, Dict, Any, Optional

from google.api_core.exceptions import InvalidArgument
from google.cloud import firestore

logger = logging.getLogger("app.firestore")

_RESERVED_ID = re.compile(r"^__.*__$")
MAX_ID_BYTES = 1500


def is_valid_document_id(doc_id: str) -> bool:
    """Check that a string can address a single Firestore document"""
    if not doc_id or "/" in doc_id or doc_id in (".", ".."):
        return False
    if len(doc_id.encode("utf-8")) > MAX_ID_BYTES:
        return False
    return not _RESERVED_ID.match(doc_id)


class FirestoreDB:
    def __init__(self, client, posts_collection: str = "posts", users_collection: str = "users"):
        self.db = client
        self.posts_collection = posts_collection
        self.users_collection = users_collection

    def collection(self, name: str):
        return self.db.collection(name)

    def get_all_posts(self) -> List[Dict[str, Any]]:
        """Get all posts sorted by date descending"""
        posts_ref = self.collection(self.posts_collection) \
            .order_by("date", direction=firestore.Query.DESCENDING) \
            .stream()
        posts = []
        for doc in posts_ref:
            post_data = doc.to_dict()
            post_data["id"] = doc.id
            posts.append(post_data)
        return posts

    def get_post(self, post_id: str) -> Optional[Dict[str, Any]]:
        """Get a post by ID, or None when the id is malformed or absent"""
        if not is_valid_document_id(post_id):
            logger.debug("Rejected malformed post id %r", post_id)
            return None

        try:
            snapshot = self.collection(self.posts_collection).document(post_id).get()
        except (InvalidArgument, ValueError) as e:
            logger.debug("Lookup of post %r failed: %s", post_id, e)
            return None

        if not snapshot.exists:
            return None
        post_data = snapshot.to_dict()
        post_data["id"] = snapshot.id
        return post_data

    def create_post(self, post_data: Dict[str, Any]) -> str:
        """Create a new post and return its generated id"""
        new_post_ref = self.collection(self.posts_collection).document()
        new_post_ref.set(post_data)
        return new_post_ref.id

    def delete_post(self, post_id: str):
        self.collection(self.posts_collection).document(post_id).delete()

    def update_likes(self, post_id: str, likes: List[Dict[str, Any]]):
        """Overwrite the embedded likes array of a post"""
        self.collection(self.posts_collection).document(post_id).update({"likes": likes})

    def update_comments(self, post_id: str, comments: List[Dict[str, Any]]):
        """Overwrite the embedded comments array of a post"""
        self.collection(self.posts_collection).document(post_id).update({"comments": comments})

    def get_user(self, user_id: str) -> Optional[Dict[str, Any]]:
        """Get a user profile document, or None if there is none"""
        if not is_valid_document_id(user_id):
            return None
        snapshot = self.collection(self.users_collection).document(user_id).get()
        if not snapshot.exists:
            return None
        user_data = snapshot.to_dict()
        user_data["id"] = snapshot.id
        return user_data
