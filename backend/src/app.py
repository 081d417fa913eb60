# backend/src/app.py

import logging
from typing import List
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from src.core import (
    Settings,
    load_settings,
    handle_quiz_request,
    QuizRequest,
    QuizQuestion,
    ErrorResponse,
)
from src.core.errors import QuizError, InternalError
from src.core.gemini_qg import UpstreamCall

logger = logging.getLogger("quiz")

ALL_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"]


# Middleware to log requests
class LogRequestMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        try:
            body = await request.body()
            logger.info(
                f"Incoming {request.method} {request.url.path} body={body.decode('utf-8')}"
            )
        except Exception:
            logger.warning("Could not read request body")
        return await call_next(request)


# ------------------------------------------------------------
# Exception handlers
# ------------------------------------------------------------
async def quiz_exception_handler(request: Request, exc: QuizError):
    logger.error(f"Quiz error escaped route: {exc}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())


async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    err = InternalError()
    return JSONResponse(status_code=err.status_code, content=err.to_body())


# ------------------------------------------------------------
# App factory
# ------------------------------------------------------------
def create_app(settings: Settings | None = None, call_upstream: UpstreamCall | None = None) -> FastAPI:
    settings = settings or load_settings()

    app = FastAPI(title="Quiz Generator API")
    app.state.settings = settings
    app.state.call_upstream = call_upstream

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(LogRequestMiddleware)

    app.add_exception_handler(QuizError, quiz_exception_handler)
    app.add_exception_handler(Exception, global_exception_handler)

    # ------------------------------------------------------------
    # Routes
    # ------------------------------------------------------------
    @app.api_route(
        "/api/get-question",
        methods=ALL_METHODS,
        response_model=List[QuizQuestion],
        responses={
            400: {"model": ErrorResponse},
            405: {"model": ErrorResponse},
            500: {"model": ErrorResponse},
        },
        openapi_extra={
            "requestBody": {
                "content": {"application/json": {"schema": QuizRequest.model_json_schema()}},
            }
        },
    )
    async def get_question(request: Request):
        body = await request.body() if request.method == "POST" else None
        result = await handle_quiz_request(
            method=request.method,
            body=body,
            settings=request.app.state.settings,
            call_upstream=request.app.state.call_upstream,
        )
        return JSONResponse(status_code=result.status_code, content=result.body)

    @app.get("/healthz")
    def healthz():
        return {"ok": True}

    return app


_settings = load_settings()
logging.basicConfig(level=_settings.log_level)
app = create_app(_settings)
