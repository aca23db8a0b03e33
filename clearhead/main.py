import time
import asyncio
import logging
from dotenv import load_dotenv

# Load environment variables from .env file before anything else
load_dotenv()

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from clearhead.core.config import settings
from clearhead.core.logging import setup_logging, request_id_ctx
from clearhead.core.errors import DomainError, GENERIC_MESSAGE
from clearhead.core.db import init_models, SessionLocal
from clearhead.api.router import api_router
from clearhead.modules.events.service import OutboxRelay
from clearhead.platform.provider_registry import registry
from clearhead.modules.providers.service import ProviderService


setup_logging()
app = FastAPI(title=settings.APP_NAME)

logger = logging.getLogger(__name__)

@app.middleware("http")
async def log_requests(request: Request, call_next):
    start_time = time.time()

    response = await call_next(request)

    process_time = (time.time() - start_time) * 1000
    formatted_process_time = f"{process_time:.2f}ms"

    logger.info(
        f"Request: {request.method} {request.url.path} - Response: {response.status_code} - Time: {formatted_process_time}"
    )

    return response

@app.middleware("http")
async def add_request_id(request: Request, call_next):
    rid = request.headers.get("x-request-id", "-")
    request_id_ctx.set(rid)
    response = await call_next(request)
    return response

@app.exception_handler(DomainError)
async def domain_exception_handler(request: Request, exc: DomainError):
    logger.warning(f"{exc.__class__.__name__} for request {request.method} {request.url.path}: {exc.detail or exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.__class__.__name__, "message": exc.message},
    )

@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.critical(f"Unhandled exception for request {request.method} {request.url.path}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"message": GENERIC_MESSAGE},
    )


@app.on_event("startup")
async def on_startup():
    await init_models()
    if settings.SEED_PROVIDERS:
        async with SessionLocal() as session:
            await ProviderService(session).seed_defaults()
    app.state.outbox_task = asyncio.create_task(OutboxRelay().run())

@app.on_event("shutdown")
async def on_shutdown():
    task = getattr(app.state, "outbox_task", None)
    if task:
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
    await registry.close()


app.include_router(api_router, prefix=settings.API_PREFIX)
