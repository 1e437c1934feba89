"""
Ecommerce client errors

Every layer raises one of these types. Context is added on the way up
with annotate(), which keeps the original exception type so callers can
branch on it (e.g. NotFoundError vs UnexpectedStatusError).

Nothing in this package retries on any of these errors.
"""
from typing import List, Optional


class EcommerceError(Exception):
    """Base error for every failure raised by the ecommerce client"""

    def __init__(self, message: str, operation: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.operation = operation
        self.context: List[str] = []

    def annotate(self, context: str) -> "EcommerceError":
        """Prepend context (outermost first) and return the same error for re-raising"""
        self.context.insert(0, context)
        return self

    def __str__(self) -> str:
        return ": ".join(self.context + [self.message])


class TransportError(EcommerceError):
    """The request could not be built or sent (DNS, TLS, connection, timeout)"""


class UnexpectedStatusError(EcommerceError):
    """The response status is outside the accepted set for the operation"""

    def __init__(self, operation: str, status_code: int, body: str = ""):
        message = f"failed to {operation}, status code: {status_code}"
        if body:
            message = f"{message}, body: {body}"
        super().__init__(message, operation)
        self.status_code = status_code
        self.body = body


class DecodeError(EcommerceError):
    """The response body is not the expected JSON shape"""


class NotFoundError(EcommerceError):
    """The requested resource does not exist on the storefront"""

    def __init__(self, message: str, operation: Optional[str] = None, identifier: Optional[str] = None):
        super().__init__(message, operation)
        self.identifier = identifier


class CustomerNotFoundError(NotFoundError):
    """Customer lookup returned 404"""


class OrderNotFoundError(NotFoundError):
    """Order lookup returned 404"""


class ProductNotFoundError(NotFoundError):
    """Product lookup returned no products"""


class CredentialsError(EcommerceError):
    """Base error for credential resolution"""


class NoActiveIntegrationError(CredentialsError):
    """No Active integration of the ecommerce type exists for the POS"""

    def __init__(self, pos_id: str):
        super().__init__(f"no active ecommerce integration found for posID: {pos_id}", "resolve credentials")
        self.pos_id = pos_id


class MissingCredentialsError(CredentialsError):
    """The active integration lacks apiUrl, username or password"""

    def __init__(self, missing: List[str]):
        super().__init__(
            f"missing required ecommerce credentials: {', '.join(missing)}",
            "resolve credentials",
        )
        self.missing = missing


class TokenExchangeError(CredentialsError):
    """The username/password to bearer token exchange failed"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message, "get API key")
        self.status_code = status_code
