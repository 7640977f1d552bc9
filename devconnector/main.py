# main.py
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from devconnector.config import build_sqlalchemy_db_url, settings
from devconnector.database import Base, engine
from devconnector.error_handlers import register_exception_handlers
from devconnector.models import Post, Profile, User  # noqa: F401  registers tables on Base
from devconnector.routers import auth, users
from devconnector.routers.health import router as health_router
from devconnector.routers.posts import router as posts_router
from devconnector.routers.profile import router as profile_router


def create_app() -> FastAPI:
    application = FastAPI(
        title=settings.app_name,
        version=settings.version,
        debug=settings.debug,
    )
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(application)

    application.include_router(health_router)
    application.include_router(auth.router, prefix="/auth", tags=["auth"])
    application.include_router(users.router, prefix="/users", tags=["users"])
    application.include_router(profile_router)
    application.include_router(posts_router)

    # Only auto-create tables on sqlite; other databases are migrated out of band.
    if build_sqlalchemy_db_url(settings).startswith("sqlite"):
        Base.metadata.create_all(bind=engine)
    return application


app = create_app()
