"""Lead DTOs."""

import json
from typing import Any, Optional

from pydantic import ConfigDict, Field, field_validator

from sms_relay.application.dtos.base import DTO


class LeadRecord(DTO):
    """Qualified lead details supplied by the assistant's function call.

    Fields are free text. Non-string JSON values (numbers, booleans) are kept
    in their JSON spelling rather than rejected.
    """

    full_name: Optional[str] = Field(default=None, alias="fullName")
    phone: Optional[str] = None
    city: Optional[str] = None
    legal_concern: Optional[str] = Field(default=None, alias="legalConcern")

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        extra="ignore",
        json_schema_extra={
            "example": {
                "fullName": "Jane Doe",
                "phone": "+15550001111",
                "city": "Los Angeles",
                "legalConcern": "Car accident, other driver uninsured",
            }
        },
    )

    @field_validator("full_name", "phone", "city", "legal_concern", mode="before")
    @classmethod
    def _as_text(cls, value: Any) -> Optional[str]:
        if value is None or isinstance(value, str):
            return value
        return json.dumps(value)
