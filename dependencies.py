import logging
from typing import Annotated

from fastapi import Request, Depends, HTTPException
from firebase_admin.auth import verify_id_token

from models.user import User
from services.firestore import FirestoreDB
from services.posts import PostService

logger = logging.getLogger("app.auth")


async def get_current_user(request: Request) -> User:
    """
    Verify Firebase ID token from Authorization header and return user info
    """
    authorization = request.headers.get("Authorization")
    if not authorization or not authorization.startswith("Bearer "):
        raise HTTPException(
            status_code=401,
            detail="No token, authorization denied"
        )

    token = authorization.split("Bearer ")[1]
    try:
        decoded_token = verify_id_token(token, check_revoked=True, clock_skew_seconds=10)
    except Exception as e:
        logger.warning("Invalid authentication token: %s", e)
        raise HTTPException(
            status_code=401,
            detail="Token is not valid"
        )

    return User(
        user_id=decoded_token["uid"],
        email=decoded_token.get("email"),
        name=decoded_token.get("name"),
        picture=decoded_token.get("picture"),
    )


async def get_firestore(request: Request) -> FirestoreDB:
    """ Get Firestore DB from app state """
    return request.app.state.firestore


Firestore = Annotated[FirestoreDB, Depends(get_firestore)]


async def get_post_service(db: Firestore) -> PostService:
    """Build a post service over the app's Firestore DB"""
    return PostService(db)


CurrentUser = Annotated[User, Depends(get_current_user)]
Posts = Annotated[PostService, Depends(get_post_service)]
