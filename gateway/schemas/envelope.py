import base64
from pydantic import BaseModel, field_validator
from typing import Any, Literal, Union


class InsertResult(BaseModel):
    success: Literal[True] = True
    rowsInserted: int


class QuerySuccess(BaseModel):
    success: Literal[True] = True
    data: list[dict[str, Any]]
    rowCount: int

    @field_validator("data")
    @classmethod
    def encode_binary_values(cls, rows: list[dict[str, Any]]) -> list[dict[str, Any]]:
        """BLOB/VARBINARY values are not valid JSON text; send them base64-encoded."""
        return [
            {
                key: base64.b64encode(bytes(value)).decode("ascii")
                if isinstance(value, (bytes, bytearray, memoryview)) else value
                for key, value in row.items()
            }
            for row in rows
        ]


class QueryFailure(BaseModel):
    """Statement error reported in a 200 body by the query executor."""
    success: Literal[False] = False
    error: str


QueryResult = Union[QuerySuccess, QueryFailure]


class ErrorResponse(BaseModel):
    """Body of the 400 response for errors that escaped a handler."""
    success: Literal[False] = False
    error: str


class NotFoundResponse(BaseModel):
    error: str = "Not found"
