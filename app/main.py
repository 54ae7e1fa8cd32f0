import logging
from contextlib import asynccontextmanager
from typing import Optional
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from app.api.deps import SessionRegistry
from app.api.views import views_router
from app.api.v1.interview import interview_router
from app.api.v1.resume import resume_router
from app.core.config import settings
from app.core.exceptions import AppError, app_error_handler, global_exception_handler, http_exception_handler
from app.core.llm import Generator, build_generator
from app.core.logger import setup_logger

setup_logger(log_level=settings.LOG_LEVEL, use_json=settings.LOG_JSON)
logger = logging.getLogger(__name__)


def create_app(generator: Optional[Generator] = None) -> FastAPI:
    """
    Build the application. ``generator`` replaces the Gemini-backed client,
    which tests use to inject a fake.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Application startup: Prepify")
        yield
        logger.info(
            f"Application shutdown ({len(app.state.resume_sessions)} resume, "
            f"{len(app.state.interview_sessions)} interview session(s) discarded)"
        )

    app = FastAPI(
        title="Prepify",
        description="Resume builder and AI mock interviews.",
        version="1.0.0",
        debug=settings.DEBUG_MODE,
        lifespan=lifespan
    )

    app.state.generator = generator or build_generator()
    app.state.resume_sessions = SessionRegistry("resume")
    app.state.interview_sessions = SessionRegistry("interview")

    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(Exception, global_exception_handler)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ALLOW_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(views_router, tags=["views"])
    app.include_router(resume_router, prefix="/api/v1", tags=["resume"])
    app.include_router(interview_router, prefix="/api/v1", tags=["interview"])
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("app.main:app", host="127.0.0.1", port=8000, reload=True)
