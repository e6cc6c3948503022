"""Enrollment roster payload models.

Pydantic models for the user records returned by the AWSEd enrollment
API. Roster fixture files use the same shape.
"""

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class EnrolledUser(BaseModel):
    """A user record from the enrollment system.

    Only ``username`` and ``enrollments`` drive reconciliation; the other
    fields are accepted so that full API payloads validate.

    Attributes:
        username: Cluster username (also the namespace name).
        first_name: Given name.
        last_name: Family name.
        uid: Numeric user id.
        enrollments: Course enrollments; empty means not enrolled.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)

    username: Annotated[str, Field(min_length=1, description="Cluster username")]
    first_name: Annotated[str | None, Field(alias="firstName")] = None
    last_name: Annotated[str | None, Field(alias="lastName")] = None
    uid: Annotated[int | None, Field(description="Numeric user id")] = None
    enrollments: Annotated[
        list[str],
        Field(default_factory=list, description="Active course enrollments"),
    ]

    @property
    def is_enrolled(self) -> bool:
        """Check if the user has at least one active enrollment."""
        return bool(self.enrollments)


# Validator for roster payloads (a JSON array of users)
ROSTER_ADAPTER: TypeAdapter[list[EnrolledUser]] = TypeAdapter(list[EnrolledUser])
