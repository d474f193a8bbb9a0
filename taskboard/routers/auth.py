from fastapi import APIRouter, Request, Response
from fastapi.responses import JSONResponse

from taskboard.schemas.task import UnlockRequest
from taskboard.utils.gate import can_edit, lock, unlock

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.get("")
def auth_status(request: Request):
    return {"canEdit": can_edit(request)}


@router.post("")
def unlock_editing(body: UnlockRequest):
    resp = JSONResponse(content={"ok": True})
    if not unlock(body.password, resp):
        return JSONResponse(status_code=401, content={"ok": False})
    return resp


@router.delete("")
def lock_editing(response: Response):
    lock(response)
    return {"ok": True}
