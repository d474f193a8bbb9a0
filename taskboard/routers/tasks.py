from fastapi import APIRouter, Depends

from taskboard.schemas.task import STATUS_LABELS, TaskCreate, TaskPatch, sort_for_display
from taskboard.services.board import BoardService, get_board_service
from taskboard.utils.gate import require_edit

router = APIRouter(prefix="/api/tasks", tags=["tasks"])


@router.get("")
def read_board(board: BoardService = Depends(get_board_service)):
    """Public: every task, newest update first, plus the board columns and backend."""
    tasks = sort_for_display(board.read_board())
    columns = [{"status": status.value, "label": label} for status, label in STATUS_LABELS.items()]
    return {
        "tasks": [t.to_document() for t in tasks],
        "meta": {"storage": board.storage_mode(), "columns": columns},
    }


@router.post("", status_code=201, dependencies=[Depends(require_edit)])
def create_task(task: TaskCreate, board: BoardService = Depends(get_board_service)):
    created = board.create_task(task)
    return {"task": created.to_document()}


@router.patch("/{task_id}", dependencies=[Depends(require_edit)])
def update_task(task_id: str, patch: TaskPatch, board: BoardService = Depends(get_board_service)):
    updated = board.upsert_task(task_id, patch)
    return {"task": updated.to_document()}


@router.delete("/{task_id}", dependencies=[Depends(require_edit)])
def delete_task(task_id: str, board: BoardService = Depends(get_board_service)):
    # idempotent: unknown ids still report success
    board.delete_task(task_id)
    return {"ok": True}
