"""HTTP entry point for worker scoring.

A single scoring route (``POST /api/ScoreWorker``). It reads the raw body,
parses it into a payload, scores it and answers with the plain-text score
(``0`` or ``100``). Client errors are answered with a plain-text 400.
"""

import logging
from typing import Optional

from fastapi import Depends, FastAPI, Request
from fastapi.responses import PlainTextResponse

from worker_scoring import __version__
from worker_scoring.config.environment import EnvironmentConfig
from worker_scoring.config.loader import load_config
from worker_scoring.config.models import AppConfig
from worker_scoring.domain import PayloadError, parse_payload
from worker_scoring.logging import get_logger, log_context
from worker_scoring.logging.context import new_request_id
from worker_scoring.scoring import build_rationale_dict, evaluate_payload

from .auth import FunctionKeyError, require_function_key

logger = get_logger(__name__, component="api")

SCORE_ROUTE = "/api/ScoreWorker"
REQUEST_ID_HEADER = "x-request-id"


def _log_diagnostic(level: int, message: str, **extra) -> None:
    """Emit a diagnostic log line; a failure here must never change the response."""
    try:
        logger.log(level, message, extra=extra)
    except Exception:
        pass


def create_app(
    app_config: Optional[AppConfig] = None,
    env_config: Optional[EnvironmentConfig] = None,
) -> FastAPI:
    """Build the FastAPI application.

    When called without arguments (e.g. ``uvicorn --factory``) configuration
    is loaded from the default config file locations and the environment.

    Args:
        app_config: Validated application configuration
        env_config: Validated environment configuration

    Returns:
        Configured FastAPI application
    """
    if app_config is None and env_config is None:
        app_config, env_config = load_config()
    app_config = app_config or AppConfig()
    env_config = env_config or EnvironmentConfig()

    app = FastAPI(
        title="Worker Scoring Service",
        description="Binary job/worker qualification scoring",
        version=__version__,
    )
    app.state.app_config = app_config
    app.state.function_key = env_config.function_key

    if not env_config.auth_enabled and env_config.environment != "local":
        logger.warning(
            "No function key configured; scoring route is open",
            extra={"event": "auth.disabled", "environment": env_config.environment},
        )

    @app.middleware("http")
    async def bind_request_context(request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or new_request_id()
        with log_context(request_id=request_id, method=request.method, path=request.url.path):
            response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = request_id
        return response

    @app.exception_handler(FunctionKeyError)
    async def handle_function_key_error(request: Request, exc: FunctionKeyError):
        logger.warning(
            "Rejected request without valid function key",
            extra={"event": "auth.rejected", "path": request.url.path},
        )
        return PlainTextResponse("Unauthorized", status_code=401)

    @app.post(
        SCORE_ROUTE,
        response_class=PlainTextResponse,
        dependencies=[Depends(require_function_key)],
    )
    async def score_worker(request: Request) -> PlainTextResponse:
        log_payloads = request.app.state.app_config.logging.log_payloads
        body = await request.body()

        if log_payloads:
            _log_diagnostic(
                logging.INFO,
                "Score request received",
                event="score.request.received",
                body=body.decode("utf-8", errors="replace"),
                body_bytes=len(body),
            )

        try:
            payload = parse_payload(body)
        except PayloadError as e:
            _log_diagnostic(
                logging.WARNING,
                f"Rejected score request: {e.client_message}",
                event="score.request.rejected",
                error_type=type(e).__name__,
                error=e.detail,
            )
            return PlainTextResponse(e.client_message, status_code=400)

        if log_payloads:
            _log_diagnostic(
                logging.INFO,
                "Payload parsed",
                event="score.payload.parsed",
                payload=payload.model_dump(mode="json", by_alias=True),
            )

        score_result = evaluate_payload(payload)

        _log_diagnostic(
            logging.INFO,
            f"Score computed: {score_result.result}",
            event="score.computed",
            worker_id=payload.worker.id,
            **build_rationale_dict(score_result),
        )

        return PlainTextResponse(str(score_result.result))

    return app
