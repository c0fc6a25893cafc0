"""
Exceptions — Error hierarchy for the Graph SDK.

Every error raised by the SDK is an SDKException. Errors returned by Graph
itself (a JSON body with an "error" envelope) are raised as a
ResponseException whose `previous` attribute (also chained as __cause__) is
one of the category exceptions below, chosen from the numeric error code and
subcode:

  AuthenticationException  Token expired, revoked or invalid; login status
  AuthorizationException   Missing permissions (code 10, 200-299)
  ThrottleException        API rate limiting (4, 17, 32, 341, 613)
  ServerException          Graph-side failure, possible downtime (1, 2)
  ClientException          Duplicate post (506)
  ResumableUploadException Chunked video upload errors (subcode 13630xx)
  OtherException           Everything else
"""

from typing import Any, Optional


class SDKException(Exception):
    """Base exception for all Graph SDK errors."""

    def __init__(self, message: str = "", code: int = 0):
        super().__init__(message)
        self.message = message
        self.code = code


class AuthenticationException(SDKException):
    pass


class AuthorizationException(SDKException):
    pass


class ClientException(SDKException):
    pass


class OtherException(SDKException):
    pass


class ServerException(SDKException):
    pass


class ThrottleException(SDKException):
    pass


class ResumableUploadException(SDKException):
    """A chunk transfer failed in a way Graph says can be resumed.

    start_offset/end_offset are set when Graph tells us which byte range it
    expects next (subcode 1363037).
    """

    def __init__(
        self,
        message: str = "",
        code: int = 0,
        start_offset: Optional[int] = None,
        end_offset: Optional[int] = None,
    ):
        super().__init__(message, code)
        self.start_offset = start_offset
        self.end_offset = end_offset


AUTHENTICATION_SUBCODES = {458, 459, 460, 463, 464, 467}
RESUMABLE_UPLOAD_SUBCODES = {1363030, 1363019, 1363033, 1363021, 1363041}
RESUMABLE_UPLOAD_OFFSET_SUBCODE = 1363037

AUTHENTICATION_CODES = {100, 102, 190}
SERVER_CODES = {1, 2}
THROTTLE_CODES = {4, 17, 32, 341, 613}
DUPLICATE_POST_CODE = 506


def _to_int(value: Any) -> Optional[int]:
    """Return value as int if it is numeric, else None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    try:
        return int(float(value))
    except (TypeError, ValueError):
        return None


class ResponseException(SDKException):
    """An error envelope returned by Graph.

    Attributes:
        response: The GraphResponse the error was decoded from.
        previous: The category exception (AuthenticationException, ...).
    """

    def __init__(self, response, previous: Optional[SDKException] = None):
        self.response = response
        decoded = response.decoded_body
        self.response_data = decoded if isinstance(decoded, dict) else {}

        message = self._get("message", "Unknown error from Graph.")
        code = _to_int(self._get("code", -1))
        super().__init__(str(message), code if code is not None else -1)

        self.previous = previous
        self.__cause__ = previous

    def _get(self, key: str, default: Any = None) -> Any:
        error = self.response_data.get("error")
        if isinstance(error, dict) and error.get(key) is not None:
            return error[key]
        return default

    @classmethod
    def create(cls, response) -> "ResponseException":
        """Build the appropriate exception for a Graph error response.

        Subcodes are checked first, then codes, then the error type. See the
        module docstring for the full mapping.
        """
        data = response.decoded_body
        if not isinstance(data, dict):
            data = {}

        error = data.get("error")
        if not (isinstance(error, dict) and "code" in error) and "code" in data:
            data = {"error": data}
            error = data["error"]
        if not isinstance(error, dict):
            error = {}

        code = _to_int(error.get("code"))
        message = error.get("message") or "Unknown error from Graph."

        subcode = error.get("error_subcode")
        if subcode is not None:
            subcode = _to_int(subcode)

            if subcode in AUTHENTICATION_SUBCODES:
                return cls(response, AuthenticationException(message, code))

            if subcode in RESUMABLE_UPLOAD_SUBCODES:
                return cls(response, ResumableUploadException(message, code))

            if subcode == RESUMABLE_UPLOAD_OFFSET_SUBCODE:
                error_data = error.get("error_data") or {}
                return cls(
                    response,
                    ResumableUploadException(
                        message,
                        code,
                        start_offset=_to_int(error_data.get("start_offset")),
                        end_offset=_to_int(error_data.get("end_offset")),
                    ),
                )

        if code in AUTHENTICATION_CODES:
            return cls(response, AuthenticationException(message, code))
        if code in SERVER_CODES:
            return cls(response, ServerException(message, code))
        if code in THROTTLE_CODES:
            return cls(response, ThrottleException(message, code))
        if code == DUPLICATE_POST_CODE:
            return cls(response, ClientException(message, code))

        # Missing permissions
        if code == 10 or (code is not None and 200 <= code <= 299):
            return cls(response, AuthorizationException(message, code))

        if error.get("type") == "OAuthException":
            return cls(response, AuthenticationException(message, code))

        return cls(response, OtherException(message, code))

    @property
    def http_status_code(self) -> int:
        return self.response.http_status_code

    @property
    def sub_error_code(self) -> int:
        subcode = _to_int(self._get("error_subcode", -1))
        return subcode if subcode is not None else -1

    @property
    def error_type(self) -> str:
        return str(self._get("type", ""))

    @property
    def raw_response(self) -> Optional[str]:
        return self.response.body
