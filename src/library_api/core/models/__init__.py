"""Request and response envelope models."""

from .envelope import ApiGatewayRequest, ApiGatewayResponse, ErrorResponse

__all__ = ["ApiGatewayRequest", "ApiGatewayResponse", "ErrorResponse"]
