from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Any, List


def _list_or_empty(value: Any) -> List[Any]:
    # Wrong-typed fields degrade to an empty list instead of a 422
    return value if isinstance(value, list) else []


class StateSchema(BaseModel):
    selectedOrder: List[int]
    extraIds: List[int]
    maxId: int


class BulkAddRequest(BaseModel):
    ids: List[Any] = Field(default_factory=list)

    model_config = ConfigDict(extra="ignore")

    @field_validator("ids", mode="before")
    @classmethod
    def _coerce_ids(cls, value: Any) -> List[Any]:
        return _list_or_empty(value)


class BulkAddResponse(BaseModel):
    added: List[int]
    skipped: List[Any]


class SelectionUpdateRequest(BaseModel):
    order: List[Any] = Field(default_factory=list)

    model_config = ConfigDict(extra="ignore")

    @field_validator("order", mode="before")
    @classmethod
    def _coerce_order(cls, value: Any) -> List[Any]:
        return _list_or_empty(value)


class SelectionResponse(BaseModel):
    selectedOrder: List[int]


class UnselectedPageSchema(BaseModel):
    items: List[int]
    total: int
