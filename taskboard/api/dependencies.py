"""
FastAPI dependencies that hand the process-wide store client to the services.

The store is created in the application lifespan (or passed to
create_application in tests) and kept on app.state.
"""

from typing import Annotated

from fastapi import Depends, Request

from taskboard.config import Settings, get_settings
from taskboard.database import DocumentStore
from taskboard.services.auth_service import AuthService
from taskboard.services.task_service import TaskService
from taskboard.services.user_service import UserService


def get_store(request: Request) -> DocumentStore:
    return request.app.state.store


StoreDep = Annotated[DocumentStore, Depends(get_store)]
SettingsDep = Annotated[Settings, Depends(get_settings)]


def get_task_service(store: StoreDep, settings: SettingsDep) -> TaskService:
    return TaskService(store, collection=settings.tasks_collection)


def get_user_service(store: StoreDep, settings: SettingsDep) -> UserService:
    return UserService(store, collection=settings.users_collection)


def get_auth_service(store: StoreDep, settings: SettingsDep) -> AuthService:
    return AuthService(
        store,
        collection=settings.users_collection,
        bcrypt_rounds=settings.bcrypt_rounds,
    )
