# tests/test_models.py

import warnings

from taskboard.models.task import Task
from taskboard.models.user import UserProfile


def test_user_profile_schema_example():
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        schema = UserProfile.model_json_schema()

    assert schema["example"] == {
        "uid": "firebase-or-other-uid",
        "name": "Ada",
        "email": "ada@example.com",
    }


def test_task_dumps_created_at_in_camel_case():
    task = Task(title="t", description="d")

    assert set(task.to_document()) == {"title", "description", "createdAt"}
    assert task.to_document()["createdAt"].endswith("Z")
