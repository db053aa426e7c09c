import logging
from urllib.parse import urlparse

from fastapi import APIRouter, Request, Response, HTTPException
from firebase_admin import auth

from config import settings
from dependencies import CurrentUser, Posts
from models.token import TokenRequest
from models.user import UserProfile

router = APIRouter()
logger = logging.getLogger("app.auth")


@router.post("/login")
async def login(token_request: TokenRequest, request: Request, response: Response):
    try:
        decoded_token = auth.verify_id_token(
            id_token=token_request.id_token,
            clock_skew_seconds=10
        )

        expires_in = settings.session_cookie_days * 24 * 60 * 60
        session_cookie = auth.create_session_cookie(
            token_request.id_token,
            expires_in=expires_in
        )
    except Exception as e:
        logger.warning("Login failed: %s", e)
        raise HTTPException(status_code=401, detail="Authentication failed")

    # Scope the cookie to the caller's origin outside local development
    origin = request.headers.get("origin", "")
    domain = None
    if origin and "localhost" not in origin:
        domain = urlparse(origin).hostname

    response.set_cookie(
        key="session",
        value=str(session_cookie),
        httponly=True,
        secure=settings.session_cookie_secure,
        max_age=expires_in,
        path="/",
        samesite="lax",
        domain=domain
    )

    logger.info("User %s logged in", decoded_token["uid"])
    return {"success": True, "user_id": decoded_token["uid"]}


@router.post("/logout")
async def logout(response: Response):
    response.delete_cookie(
        key="session",
        path="/",
        httponly=True,
        secure=settings.session_cookie_secure
    )
    return {"success": True}


@router.get("/verify")
async def verify_session(request: Request):
    session_cookie = request.cookies.get("session")
    if not session_cookie:
        raise HTTPException(status_code=401, detail="No session cookie found")

    try:
        decoded_claims = auth.verify_session_cookie(
            session_cookie=session_cookie,
            check_revoked=True,
            clock_skew_seconds=10
        )
    except auth.InvalidSessionCookieError:
        raise HTTPException(status_code=401, detail="Invalid session")
    except Exception as e:
        logger.warning("Session verification failed: %s", e)
        raise HTTPException(status_code=401, detail="Session verification failed")

    return {
        "valid": True,
        "user": {
            "uid": decoded_claims["uid"],
            "email": decoded_claims.get("email")
        }
    }


@router.get("/me", response_model=UserProfile)
async def get_me(posts: Posts, current_user: CurrentUser):
    """Return the profile snapshot that new posts and comments will carry"""
    return posts.get_profile(current_user)
