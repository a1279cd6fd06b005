"""
Task store adapter.

Each user's tasks are one document in the tasks collection, addressed by the
sanitized e-mail and holding a flat mapping task_id -> task. The adapter keeps
no state of its own: every call is one read and/or one write on that document.

Writes touch a single top-level key (merge on create, targeted set on update,
targeted unset on delete), so concurrent operations on different tasks of the
same user do not overwrite each other.
"""

import logging
import secrets
import time
from typing import Any, Dict, Optional, Tuple

from taskboard.database import DocumentStore
from taskboard.errors import NotFoundError, ValidationError, require
from taskboard.models.task import Task

logger = logging.getLogger(__name__)


def sanitize_email(email: str) -> str:
    """
    Turn an e-mail into a task document key: "." -> "_dot_", then "@" -> "_at_".

    Every read and write path must use this function; a key computed any other
    way makes the user's tasks unreachable. The substitution is not escaped, so
    addresses that already contain "_dot_" or "_at_" can collide, e.g.
    "a.b@c.com" and "a_dot_b@c.com" map to the same key.
    """
    return email.replace(".", "_dot_").replace("@", "_at_")


def generate_task_id() -> str:
    """
    Epoch milliseconds plus a random suffix, e.g. "1735689600000-9f86d081".
    The prefix keeps ids in creation order; the suffix keeps ids created in
    the same millisecond apart.
    """
    return f"{time.time_ns() // 1_000_000}-{secrets.token_hex(4)}"


class TaskService:
    """Create, list, update and delete tasks inside per-user task documents."""

    def __init__(self, store: DocumentStore, collection: str = "tasks") -> None:
        self.store = store
        self.collection = collection

    async def create_task(
        self, title: Optional[str], description: Optional[str], email: Optional[str]
    ) -> Tuple[str, Task]:
        """
        Add a task to the user's document, creating the document if absent.
        Existing tasks are kept (merge write).
        """
        require(title=title, description=description, email=email)

        task_id = generate_task_id()
        task = Task(title=title, description=description)
        key = sanitize_email(email)
        await self.store.set(self.collection, key, {task_id: task.to_document()}, merge=True)
        logger.info("Created task %s in %s/%s", task_id, self.collection, key)
        return task_id, task

    async def list_tasks(self, email: Optional[str]) -> Dict[str, dict]:
        """Return the user's task mapping; empty if the user has no task document yet."""
        require(email=email)

        doc = await self.store.get(self.collection, sanitize_email(email))
        return doc or {}

    async def update_task(
        self,
        task_id: str,
        email: Optional[str],
        title: Optional[str] = None,
        description: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Overlay title and/or description on the stored task entry. Fields not
        given (or empty), createdAt and any other stored keys are kept as they
        are. Only the task's own key is written.
        """
        if not email or not (title or description):
            raise ValidationError("Email and updated task data are required.")

        key = sanitize_email(email)
        doc = await self.store.get(self.collection, key)
        existing = (doc or {}).get(task_id)
        if not existing:
            raise NotFoundError("Task not found.")

        updated = dict(existing)
        if title:
            updated["title"] = title
        if description:
            updated["description"] = description

        if not await self.store.update(self.collection, key, {task_id: updated}):
            # Document removed between the read and the write
            raise NotFoundError("Task not found.")
        logger.info("Updated task %s in %s/%s", task_id, self.collection, key)
        return updated

    async def delete_task(self, task_id: str, email: Optional[str]) -> str:
        """Remove one task from the user's document, leaving its siblings untouched."""
        require(email=email)

        key = sanitize_email(email)
        doc = await self.store.get(self.collection, key)
        if doc is None:
            raise NotFoundError("User tasks document not found")
        if not doc.get(task_id):
            raise NotFoundError("Task ID not found")

        if not await self.store.delete_field(self.collection, key, task_id):
            raise NotFoundError("User tasks document not found")
        logger.info("Deleted task %s from %s/%s", task_id, self.collection, key)
        return f"Task {task_id} deleted."
