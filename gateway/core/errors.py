"""
Gateway faults.

Every fault carries an HTTP status, a human-readable message and an internal
error code. The HTTP layer echoes all three verbatim.
"""

from typing import Any, Dict

import httpx


NETWORK_ERROR_CODE = 1001
LOAD_WALLET_ERROR_CODE = 1005
TOKEN_NOT_SUPPORTED_ERROR_CODE = 1006
UNKNOWN_CHAIN_ERROR_CODE = 1010
INVALID_REQUEST_ERROR_CODE = 1011
UNKNOWN_ERROR_CODE = 1099

NETWORK_ERROR_MESSAGE = "Network error. Please check your node URL, API key, and Internet connection: "
LOAD_WALLET_ERROR_MESSAGE = "Failed to load wallet: "
TOKEN_NOT_SUPPORTED_ERROR_MESSAGE = "One of the token is not supported: "
UNKNOWN_CHAIN_ERROR_MESSAGE = "Unrecognized chain or network: "
INVALID_REQUEST_ERROR_MESSAGE = "Invalid request: "
UNKNOWN_ERROR_MESSAGE = "Unknown error: "


class GatewayError(Exception):
    """Structured fault raised to the HTTP layer."""

    def __init__(self, status_code: int, message: str, error_code: int):
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.error_code = error_code

    def to_dict(self) -> Dict[str, Any]:
        return {
            "statusCode": self.status_code,
            "errorCode": self.error_code,
            "message": self.message,
        }


class TokenNotSupportedError(GatewayError):
    def __init__(self, detail: str = ""):
        super().__init__(500, TOKEN_NOT_SUPPORTED_ERROR_MESSAGE + detail, TOKEN_NOT_SUPPORTED_ERROR_CODE)


class LoadWalletError(GatewayError):
    def __init__(self, cause: Any):
        super().__init__(500, LOAD_WALLET_ERROR_MESSAGE + str(cause), LOAD_WALLET_ERROR_CODE)


class UnknownChainError(GatewayError):
    def __init__(self, chain: str, network: str):
        super().__init__(404, UNKNOWN_CHAIN_ERROR_MESSAGE + f"{chain}/{network}", UNKNOWN_CHAIN_ERROR_CODE)


class InvalidRequestError(GatewayError):
    def __init__(self, detail: str):
        super().__init__(400, INVALID_REQUEST_ERROR_MESSAGE + detail, INVALID_REQUEST_ERROR_CODE)


def to_gateway_error(exc: Exception) -> GatewayError:
    """Map an arbitrary exception onto a gateway fault."""

    if isinstance(exc, GatewayError):
        return exc
    if isinstance(exc, httpx.HTTPError):
        return GatewayError(503, NETWORK_ERROR_MESSAGE + str(exc), NETWORK_ERROR_CODE)
    return GatewayError(500, UNKNOWN_ERROR_MESSAGE + str(exc), UNKNOWN_ERROR_CODE)
