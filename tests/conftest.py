from pathlib import Path

import pytest

from teamcal.utils.config import LoggingSettings, SecuritySettings, Settings, StoreSettings


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    # Low bcrypt cost keeps the suite fast; production default is 10
    return Settings(
        store=StoreSettings(path=str(tmp_path / "db.json")),
        security=SecuritySettings(bcrypt_rounds=4),
        logging=LoggingSettings(level="WARNING", format="console"),
    )


@pytest.fixture
def core(settings):
    from teamcal.app import TeamCalApp
    return TeamCalApp(settings)


@pytest.fixture
def client(settings):
    from fastapi.testclient import TestClient
    from web.main import create_app

    # Entering the context runs startup, which seeds admin/admin
    with TestClient(create_app(settings)) as test_client:
        yield test_client

