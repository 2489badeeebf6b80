from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging

from app.core.config import settings
from app.core.errors import AppError
from app.core.responses import format_default_response
from app.db.init_db import create_all_tables
from app.middleware.request_logging import RequestLoggingMiddleware
from app.modules.auth.api.router import router as auth_router
from app.modules.user_management.api.router import router as user_router
from app.modules.follows.api.router import router as follows_router
from app.modules.posts.api.router import router as posts_router
from app.modules.posts.comments.api.router import router as comments_router
from app.modules.posts.likes.api.router import router as likes_router
from app.modules.feed.api.router import router as feed_router

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else settings.LOG_LEVEL.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger("app")

# Initialize the FastAPI application
app = FastAPI(
    title=settings.PROJECT_NAME,
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
    debug=settings.DEBUG,
    description="Social feed backend: profiles, follows, posts and feeds",
    version=settings.VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
)

@app.on_event("startup")
async def startup_event():
    logger.info(f"Starting server in {settings.ENVIRONMENT} mode")
    create_all_tables()

@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    if exc.status_code >= 500:
        logger.error(f"{type(exc).__name__} on {request.method} {request.url.path}: {exc.message}")
    else:
        logger.info(f"Rejected {request.method} {request.url.path}: {exc.message}")
    return format_default_response(exc.status_code, exc.message)

@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    response = format_default_response(exc.status_code, str(exc.detail))
    if exc.headers:
        response.headers.update(exc.headers)
    return response

@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    detail = "; ".join(
        f"{'.'.join(str(part) for part in error.get('loc', ()))}: {error.get('msg')}" for error in errors
    )
    return format_default_response(status.HTTP_400_BAD_REQUEST, f"Invalid input parameters: {detail}")

@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    logger.error(f"Document store failure on {request.method} {request.url.path}: {exc}")
    return format_default_response(status.HTTP_500_INTERNAL_SERVER_ERROR, f"Document store failure: {exc}")

# Add middleware
app.add_middleware(RequestLoggingMiddleware)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.BACKEND_CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register API routers
app.include_router(auth_router, prefix=f"{settings.API_V1_STR}/auth", tags=["authentication"])
app.include_router(user_router, prefix=f"{settings.API_V1_STR}/users", tags=["users"])
app.include_router(follows_router, prefix=f"{settings.API_V1_STR}/users", tags=["follows"])
app.include_router(posts_router, prefix=f"{settings.API_V1_STR}/posts", tags=["posts"])
app.include_router(comments_router, prefix=f"{settings.API_V1_STR}/posts/{{post_id}}/comments", tags=["comments"])
app.include_router(likes_router, prefix=f"{settings.API_V1_STR}/posts/{{post_id}}/like", tags=["likes"])
app.include_router(feed_router, prefix=f"{settings.API_V1_STR}/feed", tags=["feed"])

@app.get("/")
async def root():
    return format_default_response(
        status.HTTP_200_OK,
        f"Welcome to {settings.PROJECT_NAME}",
        {
            "version": settings.VERSION,
            "environment": settings.ENVIRONMENT,
            "documentation": "/docs" if settings.DEBUG else None,
        },
    )

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("app.main:app", host="0.0.0.0", port=8000, reload=True)
