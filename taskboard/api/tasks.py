"""
Task APIs.

POST /tasks: add a task to the caller's task document.
GET /tasks?email=: return all tasks of a user (empty object if none).
PUT /tasks/{task_id}: update title and/or description of one task.
DELETE /tasks/{task_id}: remove one task.
"""

from typing import Annotated, Optional

from fastapi import APIRouter, Body, Depends

from taskboard.api.dependencies import get_task_service
from taskboard.models.task import TaskCreate, TaskDelete, TaskUpdate
from taskboard.services.task_service import TaskService

router = APIRouter()

TaskServiceDep = Annotated[TaskService, Depends(get_task_service)]


@router.post(
    "",
    response_model=dict,
    summary="Create a task",
)
async def create_task(payload: TaskCreate, service: TaskServiceDep) -> dict:
    """Store the task under a new id and return it together with the id."""
    task_id, task = await service.create_task(payload.title, payload.description, payload.email)
    return {"id": task_id, **task.to_document()}


@router.get(
    "",
    response_model=dict,
    summary="List tasks of a user",
)
async def list_tasks(service: TaskServiceDep, email: Optional[str] = None) -> dict:
    return await service.list_tasks(email)


@router.put(
    "/{task_id}",
    response_model=dict,
    summary="Update a task",
)
async def update_task(task_id: str, payload: TaskUpdate, service: TaskServiceDep) -> dict:
    task = await service.update_task(
        task_id,
        payload.email,
        title=payload.title,
        description=payload.description,
    )
    return {"message": "Task updated", "task": task}


@router.delete(
    "/{task_id}",
    response_model=dict,
    summary="Delete a task",
)
async def delete_task(
    task_id: str,
    service: TaskServiceDep,
    payload: Annotated[Optional[TaskDelete], Body()] = None,
    email: Optional[str] = None,
) -> dict:
    """
    The e-mail is read from the JSON body; the query string is accepted as well
    for clients that cannot send a body with DELETE.
    """
    owner = (payload.email if payload else None) or email
    message = await service.delete_task(task_id, owner)
    return {"message": message}
