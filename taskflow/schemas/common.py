"""Shared schema helpers."""
from pydantic import BaseModel, ConfigDict, Field
from typing import Annotated, Iterable

# Largest value an INTEGER column holds on every supported database
MAX_DB_INT = 2**31 - 1

RowId = Annotated[int, Field(le=MAX_DB_INT)]
Count = Annotated[int, Field(gt=0, le=MAX_DB_INT)]


class UserIdInput(BaseModel):
    """Input of procedures that take a single user id."""
    model_config = ConfigDict(populate_by_name=True)

    user_id: RowId = Field(..., alias="userId")


class TaskIdInput(BaseModel):
    """Input of procedures that take a single task id."""
    model_config = ConfigDict(populate_by_name=True)

    task_id: RowId = Field(..., alias="taskId")


def reject_explicit_nulls(model: BaseModel, fields: Iterable[str]) -> None:
    """Fields that are optional to send but map to NOT NULL columns may not be sent as null."""
    for name in fields:
        if name in model.model_fields_set and getattr(model, name) is None:
            raise ValueError(f"{name} may be omitted but not set to null")
