import logging
import time
from typing import List, Optional

import uvicorn
from fastapi import FastAPI, Request, Response, status
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from errors import ServiceError
from logging_config import setup_logging
from models import ErrorOut, PainEntry
from repo_entries import EntryStore, MemoryEntryStore
from service_entries import PainService
from settings import settings

LOGGER_NAME = "pain"

ERROR_RESPONSES = {
    status.HTTP_400_BAD_REQUEST: {"model": ErrorOut},
    status.HTTP_404_NOT_FOUND: {"model": ErrorOut},
}


def create_app(
    store: Optional[EntryStore] = None,
    logger: Optional[logging.Logger] = None,
) -> FastAPI:
    """Build the API around a store and a logger.

    The routes stay thin: they read the request, call `PainService`, and
    let the `ServiceError` handler shape failures. Tests pass their own
    store and a null logger.
    """
    setup_logging(settings.log_level, settings.log_file)

    log = logger or logging.getLogger(LOGGER_NAME)
    svc = PainService(store if store is not None else MemoryEntryStore(), logger=log)

    app = FastAPI(title=settings.app_title)
    app.state.service = svc

    @app.exception_handler(ServiceError)
    async def handle_service_error(request: Request, exc: ServiceError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000
        log.info(
            "%s %s %d %.2fms",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
        )
        return response

    @app.get("/health")
    def health():
        return svc.health()

    @app.post(
        "/pain",
        response_model=PainEntry,
        status_code=status.HTTP_201_CREATED,
        responses=ERROR_RESPONSES,
    )
    async def create_pain(request: Request):
        # Body is read raw so the service decides what "invalid JSON" is.
        raw = await request.body()
        return await run_in_threadpool(svc.create, raw)

    @app.get("/pain", response_model=List[PainEntry])
    def list_pain():
        return svc.list()

    @app.get("/pain/{entry_id}", response_model=PainEntry, responses=ERROR_RESPONSES)
    def get_pain(entry_id: str):
        return svc.get(entry_id)

    @app.put("/pain/{entry_id}", response_model=PainEntry, responses=ERROR_RESPONSES)
    async def update_pain(entry_id: str, request: Request):
        raw = await request.body()
        return await run_in_threadpool(svc.update, entry_id, raw)

    @app.delete(
        "/pain/{entry_id}",
        status_code=status.HTTP_204_NO_CONTENT,
        responses=ERROR_RESPONSES,
    )
    def delete_pain(entry_id: str):
        svc.delete(entry_id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    return app


app = create_app()


if __name__ == "__main__":
    logging.getLogger(LOGGER_NAME).info("Starting server on %s:%d", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())
