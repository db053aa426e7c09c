import logging
from contextlib import asynccontextmanager

import firebase_admin
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from firebase_admin import credentials, firestore as fs
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.cors import CORSMiddleware

from config import settings
from context import RequestContextMiddleware
from routes.auth import router as auth_router
from routes.posts import router as posts_router
from services.exceptions import PostServiceError, EmptyText
from services.firestore import FirestoreDB
from utils.log import configure_logging

logger = logging.getLogger("app")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Initialize Firebase Admin SDK
    cred = credentials.Certificate(settings.firebase_credentials)
    firebase_app = firebase_admin.initialize_app(cred)

    app.state.firestore = FirestoreDB(
        fs.client(firebase_app),
        posts_collection=settings.posts_collection,
        users_collection=settings.users_collection,
    )
    logger.info("Connected to Firestore project %s", firebase_app.project_id)

    yield
    firebase_admin.delete_app(firebase_app)


def _validation_error(param: str, msg: str, value=None, location: str = "body") -> dict:
    return {"value": value, "msg": msg, "param": param, "location": location}


def create_app() -> FastAPI:
    configure_logging(settings.log_level)
    app = FastAPI(title=settings.project_name, lifespan=lifespan)

    # middleware to tag each request with an id
    app.add_middleware(RequestContextMiddleware)

    # Allow the React client
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["set-cookie", "x-request-id"]
    )

    @app.exception_handler(EmptyText)
    async def handle_empty_text(_: Request, exc: EmptyText) -> JSONResponse:
        return JSONResponse(status_code=400, content={"errors": [_validation_error("text", exc.msg, value=exc.value)]})

    @app.exception_handler(PostServiceError)
    async def handle_post_error(_: Request, exc: PostServiceError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content={"msg": exc.msg})

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(_: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"msg": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def handle_validation_exception(_: Request, exc: RequestValidationError) -> JSONResponse:
        errors = []
        for err in exc.errors():
            loc = [str(item) for item in err.get("loc", [])]
            ctx_error = err.get("ctx", {}).get("error")
            msg = str(ctx_error) if ctx_error else err.get("msg", "validation error")
            errors.append(_validation_error(
                param=loc[-1] if len(loc) > 1 else "",
                msg=msg,
                value=jsonable_encoder(err.get("input")),
                location=loc[0] if loc else "body",
            ))
        return JSONResponse(status_code=400, content={"errors": errors})

    app.include_router(posts_router, prefix="/posts", tags=["posts"])
    app.include_router(auth_router, prefix="/auth", tags=["auth"])

    return app


app = create_app()
