# userhub/main.py

from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from userhub.api import auth, users, storage
from userhub.config import Settings, load_settings
from userhub.core.entities import Role, User
from userhub.core.logger import configure_logging
from userhub.core.result import Err
from userhub.database import create_db_engine, create_session_factory, init_db
from userhub.repositories.users import SQLUserRepository
from userhub.services.storage import StorageService
from userhub.services.users import UserService


async def seed_admin(service: UserService, settings: Settings):
    if not (settings.admin_username and settings.admin_password):
        return
    if not isinstance(await service.find_by_username(settings.admin_username), Err):
        return

    admin = User(
        username=settings.admin_username,
        password=settings.admin_password,
        name="Administrator",
        role=Role.ADMIN,
    )
    await service.save(admin)
    logger.info(f"Seeded admin user {settings.admin_username}")


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or load_settings()
    configure_logging(settings.log_level)

    engine = create_db_engine(settings.database_url)
    user_service = UserService(SQLUserRepository(create_session_factory(engine)))
    storage_service = StorageService(settings.storage)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        init_db(engine)
        storage_service.init_storage_directory()
        await seed_admin(user_service, settings)
        logger.info(f"Application started ({settings.environment})")
        yield
        engine.dispose()

    app = FastAPI(title="userhub", lifespan=lifespan)

    app.state.settings = settings
    app.state.user_service = user_service
    app.state.storage_service = storage_service

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(auth.router)
    app.include_router(users.router)
    app.include_router(storage.create_router(settings.storage.endpoint))

    return app


def run():
    import uvicorn

    uvicorn.run("userhub.main:create_app", factory=True, host="0.0.0.0", port=8000)
