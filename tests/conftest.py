"""
Pytest configuration and fixtures for userhub tests.
"""

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from userhub.config import Settings, StorageConfig
from userhub.database import create_db_engine, create_session_factory, init_db
from userhub.main import create_app
from userhub.repositories.users import SQLUserRepository
from userhub.services.storage import StorageService
from userhub.services.users import UserService


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Settings pointing at a throwaway database and upload directory."""
    return Settings(
        environment="test",
        log_level="DEBUG",
        database_url=f"sqlite:///{tmp_path / 'test.db'}",
        jwt_secret_key="test-secret",
        admin_username="admin",
        admin_password="admin-pass",
        storage=StorageConfig(
            upload_dir=tmp_path / "uploads",
            environment="test",
            max_file_size=1024,
        ),
    )


@pytest.fixture
def repository(settings: Settings) -> SQLUserRepository:
    engine = create_db_engine(settings.database_url)
    init_db(engine)
    yield SQLUserRepository(create_session_factory(engine))
    engine.dispose()


@pytest.fixture
def user_service(repository: SQLUserRepository) -> UserService:
    return UserService(repository)


@pytest.fixture
def storage_service(settings: Settings) -> StorageService:
    service = StorageService(settings.storage)
    service.init_storage_directory()
    return service


@pytest.fixture
def client(settings: Settings) -> TestClient:
    """Test client with the lifespan (tables, storage dir, admin seed) run."""
    with TestClient(create_app(settings)) as client:
        yield client
