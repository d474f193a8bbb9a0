import logging

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse

from taskboard.errors import BoardError, ValidationFailed
from taskboard.logging_config import configure_logging
from taskboard.routers import auth, tasks
from taskboard.services.board import BoardService, get_board_service

configure_logging()
logger = logging.getLogger(__name__)

app = FastAPI(title="Task Board")

# API routers
app.include_router(auth.router)
app.include_router(tasks.router)


@app.get("/healthz")
def healthz(board: BoardService = Depends(get_board_service)):
    return {"ok": True, "storage": board.storage_mode()}


@app.exception_handler(BoardError)
async def board_error_handler(request: Request, exc: BoardError):
    content = {"detail": exc.message, "code": exc.code}
    if isinstance(exc, ValidationFailed) and exc.errors:
        content["errors"] = exc.errors
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.code)
    return JSONResponse(status_code=exc.status_code, content=content)


# Generic error handler to return JSON errors for unexpected exceptions
@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception):
    logger.exception("unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})
