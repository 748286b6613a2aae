"""
Structured records that make up a transaction context.

A TransactionContext starts with the request captured by the pre-request
hook and is completed with either the response or the error. The nested
dict produced by `TransactionContext.to_dict` is what templates are
rendered against and what the logger sink receives.
"""

import traceback
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Optional

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic import field_serializer
from pydantic import field_validator

from .exceptions import HasContext


class RequestRecord(BaseModel):
    """
    Request facts, captured once and never changed afterwards.

    Headers are held as a read-only mapping of tuples and dumped as
    ``{name: [values]}`` like the response headers.
    """

    model_config = ConfigDict(frozen=True)

    method: str
    uri: str
    protocol_version: str
    headers: Mapping[str, tuple[str, ...]] = Field(
        default_factory=dict, validate_default=True
    )

    @field_validator("headers")
    @classmethod
    def read_only_headers(
        cls, headers: Mapping[str, tuple[str, ...]]
    ) -> Mapping[str, tuple[str, ...]]:
        return MappingProxyType({name: tuple(values) for name, values in headers.items()})

    @field_serializer("headers")
    def dump_headers(self, headers: Mapping[str, tuple[str, ...]]) -> dict[str, list[str]]:
        return {name: list(values) for name, values in headers.items()}


class ResponseRecord(BaseModel):
    status_code: int
    status_reason: str
    protocol_version: str
    headers: dict[str, list[str]] = Field(default_factory=dict)


class ErrorRecord(BaseModel):
    message: str
    code: int = 0
    file: str = ""
    line: int = 0
    trace: str = ""
    context: Optional[Any] = None

    @classmethod
    def from_exception(cls, error: BaseException) -> "ErrorRecord":
        """
        Describe an exception the way it is logged.

        The location is the innermost traceback frame, i.e. where the error
        was raised. Errors that were never raised have no location.
        """
        file, line, trace = "", 0, ""
        if error.__traceback__ is not None:
            frames = traceback.extract_tb(error.__traceback__)
            if frames:
                file, line = frames[-1].filename, frames[-1].lineno or 0
            trace = "".join(traceback.format_tb(error.__traceback__))

        return cls(
            message=str(error),
            code=_error_code(error),
            file=file,
            line=line,
            trace=trace,
            context=error.context if isinstance(error, HasContext) else None,
        )


def _error_code(error: BaseException) -> int:
    for attribute in ("code", "errno"):
        value = getattr(error, attribute, None)
        if isinstance(value, int) and not isinstance(value, bool):
            return value
    return 0


class TransactionContext(BaseModel):
    """
    Everything known about one transaction.

    Attributes:
        transaction_id (str): Caller supplied id shared by the three hooks.
        request (RequestRecord): Set at creation, frozen.
        response (ResponseRecord | None): Set once a response is known.
        error (ErrorRecord | None): Set by the error hook only.
    """

    transaction_id: str
    request: RequestRecord
    response: Optional[ResponseRecord] = None
    error: Optional[ErrorRecord] = None

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)
