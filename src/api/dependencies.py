from fastapi import Depends, HTTPException, Request
from pymongo.database import Database

from adapter.mongodb.task_repository import MongoTaskRepository
from adapter.mongodb.user_repository import MongoUserRepository
from port.task_repository import TaskRepository
from port.token_issuer import TokenIssuer
from port.user_repository import UserRepository
from services.password_hasher import PasswordHasher
from utils.config import Settings


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_db(request: Request) -> Database:
    """Get MongoDB database from the app's connection, raising 503 if unavailable."""
    mongo = getattr(request.app.state, "mongo", None)
    if mongo is None or not mongo.is_open:
        raise HTTPException(status_code=503, detail="Database unavailable")
    return mongo.database


def get_user_repo(db: Database = Depends(get_db)) -> UserRepository:
    return MongoUserRepository(db)


def get_task_repo(db: Database = Depends(get_db)) -> TaskRepository:
    return MongoTaskRepository(db)


def get_password_hasher(request: Request) -> PasswordHasher:
    return request.app.state.password_hasher


def get_token_issuer(request: Request) -> TokenIssuer:
    return request.app.state.token_issuer
