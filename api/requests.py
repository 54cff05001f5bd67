"""Request shapes for every endpoint.

Integers are bounded to 32 bits, so out-of-range numbers fail binding
instead of reaching the store. Required ints must be non-zero and required
strings non-empty. Optional fields default to None, meaning "not supplied".
"""

from datetime import date as calendar_date, datetime
from typing import Annotated, Optional, Type, TypeVar, Union

from pydantic import AfterValidator, BaseModel, Field, ValidationError

from api.errors import BindError

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1


def _non_zero(value: int) -> int:
    """Reject 0, which counts as a missing required int."""
    if value == 0:
        raise ValueError("must be non-zero")
    return value


Int32 = Annotated[int, Field(ge=INT32_MIN, le=INT32_MAX)]
NonZeroInt = Annotated[Int32, AfterValidator(_non_zero)]
RowId = Annotated[int, Field(gt=0, le=INT32_MAX)]
RequiredStr = Annotated[str, Field(min_length=1)]

RequestT = TypeVar("RequestT", bound=BaseModel)


def bind(model: Type[RequestT], data) -> RequestT:
    """Validate raw request data against a request model.

    Args:
        model: Request model class.
        data: Parsed JSON body, query args or path args.

    Returns:
        The validated request.

    Raises:
        BindError: On the first missing or malformed field.
    """
    if not isinstance(data, dict):
        raise BindError("request body must be a JSON object")
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise BindError.from_validation_error(e)


class IdRequest(BaseModel):
    """Path shape of the single-row get and delete endpoints."""

    id: RowId


class OwnerTypeRequest(BaseModel):
    """Path shape of the graph and reports endpoints."""

    user_id: NonZeroInt
    type: RequiredStr


class CreateAccountRequest(BaseModel):
    """Body of account creation; every field is required."""

    user_id: NonZeroInt
    category_id: NonZeroInt
    title: RequiredStr
    type: RequiredStr
    description: RequiredStr
    value: NonZeroInt
    date: datetime


class UpdateAccountRequest(BaseModel):
    """Patch shape: fields left out keep their stored value."""

    id: RowId
    title: Optional[RequiredStr] = None
    description: Optional[RequiredStr] = None
    value: Optional[NonZeroInt] = None


class ListAccountsRequest(BaseModel):
    """Query shape of the account listing.

    ``date`` takes a plain day or a full timestamp; either way the filter
    matches the UTC calendar day.
    """

    user_id: NonZeroInt
    type: RequiredStr
    category_id: Optional[Int32] = None
    title: Optional[str] = None
    description: Optional[str] = None
    date: Optional[Union[calendar_date, datetime]] = None


class CreateCategoryRequest(BaseModel):
    """Body of category creation; every field is required."""

    user_id: NonZeroInt
    title: RequiredStr
    type: RequiredStr
    description: RequiredStr


class UpdateCategoryRequest(BaseModel):
    """Patch shape: the type of a category never changes."""

    id: RowId
    title: Optional[RequiredStr] = None
    description: Optional[RequiredStr] = None


class ListCategoriesRequest(BaseModel):
    """Query shape of the category listing."""

    user_id: NonZeroInt
    type: RequiredStr
    title: Optional[str] = None
    description: Optional[str] = None
