import os
import sqlite3
import logging
from pathlib import Path
from sqlalchemy import create_engine, inspect
from sqlalchemy.orm import declarative_base

# ── Paths are relative to this file (…/backend/app/db/session.py)
_THIS = Path(__file__).resolve()
APP_DIR = _THIS.parents[1]             # backend/app
DB_DIR = APP_DIR / "data"              # backend/app/data
DB_DIR.mkdir(parents=True, exist_ok=True)

# Default DB: backend/app/data/app.db
DEFAULT_DB_PATH = DB_DIR / "app.db"
DEFAULT_DB_URL = f"sqlite:///{DEFAULT_DB_PATH.as_posix()}"

DATABASE_URL = os.getenv("DATABASE_URL", DEFAULT_DB_URL)

connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}
engine = create_engine(DATABASE_URL, echo=False, future=True, connect_args=connect_args)

Base = declarative_base()

# Demo rows: backend/app/db/sql/init_data.sql
SQL_DIR = _THIS.parent / "sql"
DATA_SQL = SQL_DIR / "init_data.sql"

# Tables every metrics read depends on
REQUIRED_TABLES = ("google_sheet", "compound_metrics", "snap_shot")

def get_sqlite_conn() -> sqlite3.Connection:
    """Raw sqlite connection (for executing SQL scripts / direct queries)."""
    if engine.url.get_backend_name() != "sqlite":
        raise RuntimeError("get_sqlite_conn only supports sqlite backend")
    db_path = Path(engine.url.database)
    conn = sqlite3.connect(db_path.as_posix())
    conn.row_factory = sqlite3.Row
    return conn

def _tables_exist() -> bool:
    existing = set(inspect(engine).get_table_names())
    return all(t in existing for t in REQUIRED_TABLES)

def _executescript(path: Path):
    if not path.exists():
        raise FileNotFoundError(f"SQL file not found: {path}")
    sql = path.read_text(encoding="utf-8")
    with get_sqlite_conn() as c:
        c.executescript(sql)
        c.commit()

def create_schema():
    # Registers the table classes on Base.metadata
    import app.models  # noqa: F401
    Base.metadata.create_all(engine)

def _maybe_bootstrap():
    # Allow forced rebuild
    if os.getenv("RESET_DB", "0") == "1":
        p = Path(engine.url.database)
        if p.exists():
            p.unlink()

    # Skip auto-bootstrap if disabled
    if os.getenv("AUTO_BOOTSTRAP_DB", "1") != "1":
        return

    # If metric tables are missing, initialize schema + demo data
    if not _tables_exist():
        logging.info("[DB] Bootstrapping schema & demo data at %s", engine.url.database)
        DB_DIR.mkdir(parents=True, exist_ok=True)
        create_schema()
        _executescript(DATA_SQL)
        logging.info("[DB] Bootstrap complete.")

try:
    _maybe_bootstrap()
except Exception as e:
    logging.warning("[DB] Bootstrap skipped due to error: %s", e)
