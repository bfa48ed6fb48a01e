"""
Form field schemas for container numbers.

A container field carries the typed number plus the id and type code the
backend resolved for it (both null until the container is found or created).
"""

import uuid
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .container_number import ContainerNumberError, parse_container_number


def container_number_field(value):
    """Validate a container number form value and return its normalized form.

    Raises:
        ContainerNumberError: with the user-facing message for the failure
    """
    return parse_container_number(value).full


class ContainerFieldValue(BaseModel):
    """Container picker value: {id, number, typeCode}. All keys are required."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: Optional[uuid.UUID]
    number: str
    type_code: Optional[str] = Field(alias="typeCode")

    @field_validator("number", mode="before")
    @classmethod
    def _check_number(cls, value):
        if value is not None and not isinstance(value, str):
            raise ValueError("Container number must be text")
        try:
            return container_number_field(value)
        except ContainerNumberError as e:
            # pydantic reports ValueError messages as "Value error, <message>"
            raise ValueError(e.message) from e

    def to_payload(self):
        """Dict in the backend's camelCase shape."""
        return {
            "id": str(self.id) if self.id else None,
            "number": self.number,
            "typeCode": self.type_code,
        }


def safe_parse_container_field(data):
    """Parse without raising.

    Returns:
        (ContainerFieldValue or None, list of error dicts)
    """
    try:
        return ContainerFieldValue.model_validate(data), []
    except ValidationError as e:
        return None, [
            {"field": ".".join(str(p) for p in err["loc"]), "message": err["msg"]}
            for err in e.errors()
        ]
