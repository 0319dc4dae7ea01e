# backend/tests/conftest.py
import os, sys, sqlite3, pathlib, pytest
from fastapi.testclient import TestClient

BACKEND_DIR = pathlib.Path(__file__).resolve().parents[1]   # .../backend
APP_DIR = BACKEND_DIR / "app"
DB_PATH = APP_DIR / "data" / "test_metrics.db"

# Make `from app.*` importable
sys.path.insert(0, str(BACKEND_DIR))

# Set the database path early (the read layer uses engine.url.database);
# tables and rows are created by the fixture below, not by the demo bootstrap
os.environ["DATABASE_URL"] = f"sqlite:///{DB_PATH.as_posix()}"
os.environ["AUTO_BOOTSTRAP_DB"] = "0"

# Fixed rows; service tests resolve periods against a reference day in Feb 2024
GOOGLE_SHEET_ROWS = [
    ("2023-12-20 00:00:00", "projects_delivering_impact", 100),
    ("2024-01-05 00:00:00", "projects_delivering_impact", 10),
    ("2024-01-20 00:00:00", "projects_delivering_impact", 20),
    ("2024-02-10 00:00:00", "projects_delivering_impact", 30),

    ("2023-11-01 00:00:00", "pocket_network_DNA_NPS", 30),
    ("2023-12-01 00:00:00", "pocket_network_DNA_NPS", 35),
    ("2024-01-01 00:00:00", "pocket_network_DNA_NPS", 40),
    ("2023-12-01 00:00:00", "community_NPS", 20),
    ("2024-01-01 00:00:00", "community_NPS", 25),

    ("2024-01-01 00:00:00", "twitter_followers_count", 100),
    ("2024-01-31 23:30:00", "twitter_followers_count", 150),
    ("2024-02-01 00:00:00", "twitter_followers_count", 200),
    ("2023-06-01 00:00:00", "twitter_followers_count", "n/a"),
    ("2022-03-10 00:00:00", "twitter_followers_count", None),

    ("2024-01-10 00:00:00", "projects_working_in_open_count", 7),

    ("2024-01-01 00:00:00", "velocity_of_experiments", 4),
    ("2024-01-15 00:00:00", "velocity_of_experiments", 6),
]
COMPOUND_ROWS = [
    ("2023-12-31 00:00:00", "percentage_of_projects_self_reporting", 0.4),
    ("2024-01-31 00:00:00", "percentage_of_projects_self_reporting", 0.5),
]
SNAPSHOT_ROWS = [
    ("2024-01-01 00:00:00", 2, 1),
    ("2024-01-20 00:00:00", 1, 1),
]

@pytest.fixture(scope="session", autouse=True)
def _prepare_db():
    DB_PATH.parent.mkdir(parents=True, exist_ok=True)
    if DB_PATH.exists():
        DB_PATH.unlink()

    from app.db.session import create_schema
    create_schema()

    with sqlite3.connect(DB_PATH) as conn:
        conn.executemany(
            "INSERT INTO google_sheet(date, metric_name, metric_value) VALUES (?,?,?)", GOOGLE_SHEET_ROWS
        )
        conn.executemany(
            "INSERT INTO compound_metrics(date, metric_name, metric_value) VALUES (?,?,?)", COMPOUND_ROWS
        )
        conn.executemany(
            "INSERT INTO snap_shot(date, community_proposals_count, core_proposals_count) VALUES (?,?,?)",
            SNAPSHOT_ROWS,
        )
    yield

@pytest.fixture()
def db_path() -> pathlib.Path:
    return DB_PATH

@pytest.fixture()
def client():
    from app.main import app
    return TestClient(app)
