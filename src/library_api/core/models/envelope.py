"""API Gateway proxy envelopes.

Field names follow the Lambda proxy integration event format; Python code
uses the snake_case attribute names.
"""

import base64
import binascii
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ApiGatewayRequest(BaseModel):
    """Inbound request envelope."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    http_method: str | None = Field(default=None, alias="httpMethod")
    path: str | None = Field(default=None, description="Request path")
    headers: dict[str, str] | None = Field(default=None)
    path_parameters: dict[str, str] | None = Field(default=None, alias="pathParameters")
    query_string_parameters: dict[str, str] | None = Field(
        default=None, alias="queryStringParameters"
    )
    body: str | None = Field(default=None, description="Raw request body")
    is_base64_encoded: bool = Field(default=False, alias="isBase64Encoded")

    def path_parameter(self, name: str) -> str:
        """Return a path parameter, or an empty string when absent."""
        return (self.path_parameters or {}).get(name, "")

    def decoded_body(self) -> str:
        """Return the body as text, undoing API Gateway's base64 encoding.

        Raises:
            ValueError: If a base64 body is not valid base64, or does not
                decode to UTF-8 text
        """
        body = self.body or ""
        if not self.is_base64_encoded:
            return body
        try:
            raw = base64.b64decode(body, validate=True)
        except binascii.Error as e:
            raise ValueError(f"invalid base64 body: {e}") from e
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ValueError(f"body is not valid UTF-8: {e}") from e


class ApiGatewayResponse(BaseModel):
    """Outbound response envelope."""

    model_config = ConfigDict(populate_by_name=True)

    status_code: int = Field(alias="statusCode")
    headers: dict[str, str] = Field(default_factory=dict)
    body: str = Field(default="")

    def to_event(self) -> dict[str, Any]:
        """Dump in the shape the Lambda runtime hands back to API Gateway."""
        return self.model_dump(by_alias=True)


class ErrorResponse(BaseModel):
    """JSON body of every failed request."""

    error: str
