"""
Exception classes for HTTP Signatures verification

Every failure raised by this package derives from HttpSignaturesError and
carries a machine readable error code next to the human readable message.
"""

from typing import Optional, Dict, Any


class ErrorCodes:
    """Standard error codes for verification operations"""

    # Parameter errors
    MISSING_SIGNATURE = "MISSING_SIGNATURE"
    MISSING_ALGORITHM = "MISSING_ALGORITHM"
    MISSING_KEY_ID = "MISSING_KEY_ID"

    # Request errors
    MISSING_SIGNATURE_HEADER = "MISSING_SIGNATURE_HEADER"
    MISSING_REQUIRED_HEADER = "MISSING_REQUIRED_HEADER"
    INVALID_REQUEST = "INVALID_REQUEST"
    INSUFFICIENT_HEADERS = "INSUFFICIENT_HEADERS"

    # Crypto errors
    UNSUPPORTED_ALGORITHM = "UNSUPPORTED_ALGORITHM"
    INVALID_KEY = "INVALID_KEY"
    KEY_NOT_FOUND = "KEY_NOT_FOUND"
    INVALID_SIGNATURE_ENCODING = "INVALID_SIGNATURE_ENCODING"

    # Configuration errors
    INVALID_CONFIG = "INVALID_CONFIG"


class HttpSignaturesError(Exception):
    """Base exception for all httpsignatures errors"""

    def __init__(self, message: str, error_code: str = "UNKNOWN_ERROR", details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}

    def __repr__(self) -> str:
        return f"{type(self).__name__}(message='{self.message}', error_code='{self.error_code}', details={self.details})"


class SignatureParameterError(HttpSignaturesError):
    """
    Raised when a signature parameter string fails validation.

    The best-effort parse result is attached as ``parameters`` so callers can
    inspect what was read without parsing again.
    """

    def __init__(self, message: str, error_code: str, parameters: Any = None,
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(message, error_code, details)
        self.parameters = parameters


class MissingSignatureError(SignatureParameterError):
    """The signature parameter is absent or empty"""

    def __init__(self, parameters: Any = None):
        super().__init__("Missing signature", ErrorCodes.MISSING_SIGNATURE, parameters)


class MissingAlgorithmError(SignatureParameterError):
    """The algorithm parameter is absent or not a supported token"""

    def __init__(self, parameters: Any = None):
        super().__init__("Missing algorithm", ErrorCodes.MISSING_ALGORITHM, parameters)


class MissingKeyIdError(SignatureParameterError):
    """The keyId parameter is absent or empty"""

    def __init__(self, parameters: Any = None):
        super().__init__("Missing keyId", ErrorCodes.MISSING_KEY_ID, parameters)


class MissingSignatureHeaderError(HttpSignaturesError):
    """Neither an Authorization header with the signature scheme nor a Signature header is present"""

    def __init__(self, message: str = "Missing signature header", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, ErrorCodes.MISSING_SIGNATURE_HEADER, details)


class MissingRequiredHeaderError(HttpSignaturesError):
    """A header covered by the signature is not present on the request"""

    def __init__(self, header: str):
        super().__init__(
            f"Missing required header: {header}",
            ErrorCodes.MISSING_REQUIRED_HEADER,
            {"header": header}
        )
        self.header = header


class UnsupportedAlgorithmError(HttpSignaturesError):
    """Exception raised when no verification strategy exists for an algorithm"""

    def __init__(self, algorithm: Any):
        super().__init__(
            f"Unsupported algorithm: {algorithm}",
            ErrorCodes.UNSUPPORTED_ALGORITHM,
            {"algorithm": str(algorithm)}
        )


class InvalidKeyError(HttpSignaturesError):
    """Exception raised for unusable key material"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, ErrorCodes.INVALID_KEY, details)


class KeyNotFoundError(HttpSignaturesError):
    """Exception raised when no key could be resolved for a key id"""

    def __init__(self, key_id: str):
        super().__init__(f"No key found for keyId: {key_id}", ErrorCodes.KEY_NOT_FOUND, {"key_id": key_id})


class SignatureDecodeError(HttpSignaturesError):
    """Exception raised when the supplied signature is not valid base64"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, ErrorCodes.INVALID_SIGNATURE_ENCODING, details)


class InvalidRequestError(HttpSignaturesError):
    """Exception raised when a request object cannot be read"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, ErrorCodes.INVALID_REQUEST, details)


class InsufficientHeadersError(HttpSignaturesError):
    """Exception raised when a signature does not cover headers required by policy"""

    def __init__(self, missing: list):
        super().__init__(
            f"Signature does not cover required headers: {', '.join(missing)}",
            ErrorCodes.INSUFFICIENT_HEADERS,
            {"missing_headers": list(missing)}
        )


class ConfigurationError(HttpSignaturesError):
    """Exception raised for invalid verifier configuration"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, ErrorCodes.INVALID_CONFIG, details)
