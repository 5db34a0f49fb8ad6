"""Task dependency endpoints: thin HTTP wrapper around DependencyService."""
from __future__ import annotations

import logging
from typing import Any, List

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ..config import config
from ..errors import (
    CircularDependencyError,
    DependencyError,
    DuplicateError,
    InvalidDependencyError,
    InvalidScopeError,
    NotFoundError,
    StoreUnavailable,
)
from ..metrics import CRIT_PATH_LEN, CYCLE_REJECTED, STORE_FAILURES
from ..models import DependencyType
from ..services.dependency_service import DependencyService
from .dependencies import get_dependency_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/task-dependencies", tags=["task-dependencies"])

STATUS_CODES = {
    CircularDependencyError: 400,
    InvalidScopeError: 400,
    InvalidDependencyError: 400,
    NotFoundError: 404,
    DuplicateError: 409,
    StoreUnavailable: 503,
}


class DependencyCreate(BaseModel):
    """Request body for a new dependency (camelCase, as sent by the frontend)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    from_task_id: str = Field(min_length=1)
    to_task_id: str = Field(min_length=1)
    dependency_type: DependencyType = DependencyType.BLOCKS


def _camel(data: Any) -> Any:
    """Rename dict keys to camelCase so responses match the request casing."""
    if isinstance(data, dict):
        return {to_camel(k): _camel(v) for k, v in data.items()}
    if isinstance(data, list):
        return [_camel(v) for v in data]
    return data


def _http_error(exc: DependencyError, operation: str) -> HTTPException:
    status = next(
        (code for cls, code in STATUS_CODES.items() if isinstance(exc, cls)), 500
    )
    if isinstance(exc, StoreUnavailable):
        # the store has already logged the underlying error
        STORE_FAILURES.labels(operation).inc()
    else:
        logger.info("Task dependencies: %s rejected: %s", operation, exc)
    return HTTPException(status_code=status, detail=str(exc))


@router.get("/critical-path")
def get_critical_path(
    task_ids: List[str] = Query(default=[], alias="taskIds"),
    service: DependencyService = Depends(get_dependency_service),
):
    """Critical path for a set of tasks."""
    if len(task_ids) > config.max_scope_size:
        raise HTTPException(
            status_code=400,
            detail=f"taskIds may contain at most {config.max_scope_size} ids",
        )
    try:
        data = service.critical_path(task_ids)
    except DependencyError as exc:
        raise _http_error(exc, "critical_path") from exc
    CRIT_PATH_LEN.set(data["duration"])
    return {"success": True, "data": _camel(data)}


@router.get("/task/{task_id}")
def get_task_dependencies(
    task_id: str, service: DependencyService = Depends(get_dependency_service)
):
    """All dependencies where the task is either endpoint."""
    try:
        data = service.dependencies_for_task(task_id)
    except DependencyError as exc:
        raise _http_error(exc, "dependencies_for_task") from exc
    return {"success": True, "data": _camel(data)}


@router.post("")
@router.post("/", include_in_schema=False)
def create_dependency(
    payload: DependencyCreate, service: DependencyService = Depends(get_dependency_service)
):
    try:
        data = service.add_dependency(
            payload.from_task_id, payload.to_task_id, payload.dependency_type
        )
    except CircularDependencyError as exc:
        CYCLE_REJECTED.inc()
        raise _http_error(exc, "add_dependency") from exc
    except DependencyError as exc:
        raise _http_error(exc, "add_dependency") from exc
    return {"success": True, "data": _camel(data)}


@router.delete("/{dependency_id}")
def delete_dependency(
    dependency_id: str, service: DependencyService = Depends(get_dependency_service)
):
    try:
        service.remove_dependency(dependency_id)
    except DependencyError as exc:
        raise _http_error(exc, "remove_dependency") from exc
    return {"success": True, "message": "Dependency deleted successfully"}
