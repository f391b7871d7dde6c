# formgate/main.py
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from formgate.core import AppError
from formgate.core.config import settings, split_csv
from formgate.core.exception_handlers import app_error_handler, unhandled_exception_handler
from formgate.core.logging_config import configure_logging
from formgate.middleware.request_logging import RequestLoggingMiddleware
from formgate.routers.forms import router as forms_router
from formgate.routers.health import router as health_router
from formgate.routers.uploads import router as uploads_router

configure_logging()


def create_app() -> FastAPI:
    app = FastAPI(title=settings.app_name)

    app.add_middleware(RequestLoggingMiddleware)

    # ---- CORS (env-driven) ----
    # CORS_ALLOW_ORIGINS="http://localhost:3000,https://forms.example.com"
    allow_origins = split_csv(settings.CORS_ALLOW_ORIGINS) or ["http://localhost:3000"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Exception handlers
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # Routers
    app.include_router(health_router)
    app.include_router(forms_router)
    app.include_router(uploads_router)

    return app


app = create_app()
