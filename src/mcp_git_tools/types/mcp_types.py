"""Response envelope shared by every tool."""

import json
from typing import Any

from pydantic import BaseModel


class OperationResponse(BaseModel):
    """Uniform ``{success, message, data?}`` envelope.

    A failed response never carries data; its message names the failed
    action followed by the underlying fault text.
    """

    success: bool
    message: str
    data: Any = None

    @classmethod
    def ok(cls, message: str, data: Any = None) -> "OperationResponse":
        return cls(success=True, message=message, data=data)

    @classmethod
    def failure(cls, message: str) -> "OperationResponse":
        return cls(success=False, message=message)

    def to_payload(self) -> dict[str, Any]:
        payload = self.model_dump(mode="json")
        if self.data is None:
            payload.pop("data")
        return payload

    def to_json(self, indent: int | None = 2) -> str:
        return json.dumps(self.to_payload(), indent=indent, ensure_ascii=False)
