# 📄 File: app/shared/core/responses.py
# 🧭 Purpose (Layman Explanation):
# Wraps every successful answer from the API in the same box, so apps always
# find the status, the data and a human readable message in the same places.
# 🧪 Purpose (Technical Summary):
# Generic Pydantic success envelope {statusCode, data, message, success} used as
# the response_model of every endpoint; failures use ApiError.to_dict().
# 🔗 Dependencies:
# pydantic
# 🔄 Connected Modules / Calls From:
# User management endpoints, health endpoint

from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """Uniform success envelope."""

    model_config = ConfigDict(populate_by_name=True)

    status_code: int = Field(200, alias="statusCode")
    data: Optional[T] = None
    message: str = "Success"
    success: bool = True

    @classmethod
    def ok(cls, data: T, message: str = "Success", status_code: int = 200) -> "ApiResponse[T]":
        return cls(status_code=status_code, data=data, message=message, success=status_code < 400)
