# =============================================================================
# core/models/common.py - Shared Field Types
# =============================================================================
# Building blocks shared by the user, post and comment schemas:
# - ObjectIdStr: MongoDB ObjectId rendered as a 24-hex string
# - UtcDatetime: timestamps normalized to timezone-aware UTC
# - NonEmptyStr: trimmed string that must not be blank
# - DocumentModel: base class that accepts and emits wire (alias) names
# =============================================================================

from datetime import datetime, timezone
from typing import Annotated, Any

from bson import ObjectId
from pydantic import AfterValidator, BaseModel, BeforeValidator, ConfigDict, StringConstraints


def _stringify_object_id(value: Any) -> Any:
    return str(value) if isinstance(value, ObjectId) else value


def _as_utc(value: datetime) -> datetime:
    # pymongo hands back naive datetimes that are already UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


ObjectIdStr = Annotated[str, BeforeValidator(_stringify_object_id)]

UtcDatetime = Annotated[datetime, AfterValidator(_as_utc)]

NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class DocumentModel(BaseModel):
    """
    Base for every schema that crosses the API boundary.

    Fields are declared in snake_case with camelCase aliases (`_id`,
    `createdAt`, `userId`, ...). Both spellings are accepted on input;
    responses are serialized by alias.
    """

    model_config = ConfigDict(populate_by_name=True)
