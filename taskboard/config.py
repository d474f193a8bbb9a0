import os

# Shared edit secret; empty means the board is view-only
EDIT_PASSWORD = os.environ.get("TASKBOARD_EDIT_PASSWORD", "")

# A non-empty SQLAlchemy URL selects the relational backend, otherwise tasks
# live in a single JSON document on local disk
DATABASE_URL = os.environ.get("DATABASE_URL", "")
DATA_PATH = os.environ.get("TASKBOARD_DATA_PATH", os.path.join("data", "board.json"))
DB_POOL_SIZE = int(os.environ.get("TASKBOARD_DB_POOL_SIZE", 1))

EDIT_COOKIE_NAME = os.environ.get("TASKBOARD_COOKIE_NAME", "taskboard_edit")
COOKIE_SECURE = os.environ.get("TASKBOARD_COOKIE_SECURE", "").lower() in ("1", "true", "yes")
TOKEN_TTL_DAYS = 30

LOG_LEVEL = os.environ.get("TASKBOARD_LOG_LEVEL") or os.environ.get("LOG_LEVEL") or "INFO"
