"""Pydantic models for API request/response.

JSON keys are camelCase (firstName, isActive, lastLogin); Python attributes
stay snake_case. Field contents are validated by the domain schemas, so the
request models only describe shape.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from domain.model.task import Task, TaskPriority, TaskStatus
from domain.model.user import User, UserRole


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ── users ────────────────────────────────────────────────


class ProfileRequest(CamelModel):
    """Profile fields; omitted fields are left unchanged on update."""
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    avatar: Optional[str] = None


class RegisterRequest(CamelModel):
    """Request model for user registration."""
    username: str
    email: str
    password: str
    profile: Optional[ProfileRequest] = None


class LoginRequest(CamelModel):
    """Request model for user login."""
    email: str
    password: str


class UpdateProfileRequest(CamelModel):
    profile: ProfileRequest


class ProfileResponse(CamelModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    avatar: Optional[str] = None


class UserResponse(CamelModel):
    """Public view of a user. There is deliberately no password field."""
    id: str = Field(..., description="User ID")
    username: str
    email: str
    profile: ProfileResponse
    full_name: str
    role: UserRole
    is_active: bool
    last_login: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, user: User) -> "UserResponse":
        return cls(
            id=user.id,
            username=user.username,
            email=user.email,
            profile=ProfileResponse(
                first_name=user.profile.first_name,
                last_name=user.profile.last_name,
                avatar=user.profile.avatar,
            ),
            full_name=user.full_name,
            role=user.role,
            is_active=user.is_active,
            last_login=user.last_login,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


class AuthResponse(CamelModel):
    """Response model for register and login."""
    message: str
    token: str
    user: UserResponse


class CurrentUserResponse(CamelModel):
    user: UserResponse


class ProfileUpdateResponse(CamelModel):
    message: str
    user: UserResponse


class UserListResponse(CamelModel):
    users: list[UserResponse]
    count: int


# ── tasks ────────────────────────────────────────────────


class TaskCreateRequest(CamelModel):
    title: str
    description: Optional[str] = None
    status: TaskStatus = TaskStatus.PENDING
    priority: TaskPriority = TaskPriority.MEDIUM
    due_date: Optional[datetime] = None


class TaskUpdateRequest(CamelModel):
    """All fields optional; only the ones sent are applied."""
    title: Optional[str] = None
    description: Optional[str] = None
    status: Optional[TaskStatus] = None
    priority: Optional[TaskPriority] = None
    due_date: Optional[datetime] = None


class TaskResponse(CamelModel):
    id: str = Field(..., description="Task ID")
    title: str
    description: Optional[str] = None
    status: TaskStatus
    priority: TaskPriority
    due_date: Optional[datetime] = None
    owner_id: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, task: Task) -> "TaskResponse":
        return cls(
            id=task.id,
            title=task.title,
            description=task.description,
            status=task.status,
            priority=task.priority,
            due_date=task.due_date,
            owner_id=task.owner_id,
            created_at=task.created_at,
            updated_at=task.updated_at,
        )


class TaskEnvelope(CamelModel):
    task: TaskResponse


class TaskMutationResponse(CamelModel):
    message: str
    task: TaskResponse


class TaskListResponse(CamelModel):
    tasks: list[TaskResponse]
    total: int = Field(..., description="Total number of tasks matching filters")
    skip: int
    limit: int


class MessageResponse(CamelModel):
    message: str
