from sqlalchemy import create_engine, inspect
from sqlalchemy.pool import StaticPool

from tasker.db.base import Base
from tasker.db import models  # noqa: F401  ensure models are loaded


def test_metadata_contains_core_tables() -> None:
    table_names = set(Base.metadata.tables.keys())

    assert {"projects", "tasks", "task_fields"}.issubset(table_names)


def test_tables_create_on_sqlite() -> None:
    engine = create_engine("sqlite://", poolclass=StaticPool, future=True)
    Base.metadata.create_all(bind=engine)

    inspector = inspect(engine)
    task_columns = {column["name"] for column in inspector.get_columns("tasks")}
    field_columns = {column["name"] for column in inspector.get_columns("task_fields")}

    assert {"project_id", "estimated_minutes", "priority", "position", "status"} <= task_columns
    assert {"task_id", "name", "label", "field_type", "required", "field_order", "value"} <= field_columns
