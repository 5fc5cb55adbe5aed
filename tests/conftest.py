import pytest
from fastapi.testclient import TestClient

from core.config import Settings
from main import create_app


@pytest.fixture
def settings(tmp_path):
    """Settings pointing at a throwaway SQLite file and mirror file."""
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'stall.db'}",
        database_echo=False,
        sales_mirror_path=str(tmp_path / "data" / "sales.json"),
        log_level="WARNING",
        cors_origins=["*"],
    )


@pytest.fixture
def client(settings):
    with TestClient(create_app(settings=settings)) as c:
        yield c


@pytest.fixture
def upload_csv(client):
    """POST a CSV body to /inventory/upload."""
    def _upload(text, filename="stock.csv"):
        return client.post(
            "/inventory/upload",
            files={"file": (filename, text.encode("utf-8"), "text/csv")},
        )
    return _upload
