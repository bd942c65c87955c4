"""
Type definitions for HTTP Signatures verification

This module provides the enumerations, constants and data classes shared by the
parameter parser and the signature verifier.
"""

from typing import Dict, Optional, Union, Any
from dataclasses import dataclass, field
from enum import Enum
from urllib.parse import urlsplit

from requests.structures import CaseInsensitiveDict

from .exceptions import InvalidRequestError


class SignatureAlgorithm(str, Enum):
    """Signature algorithm tokens accepted in the algorithm parameter"""
    HMAC_SHA256 = "hmac-sha256"


# Header names and scheme prefix used on the wire
HEADER_AUTHORIZATION = "Authorization"
HEADER_SIGNATURE = "Signature"
AUTH_SCHEME = "Signature "

# Pseudo-header standing for the lower-cased method and the path with query
REQUEST_TARGET = "(request-target)"

# Covered headers when the signer omits the headers parameter
DEFAULT_HEADERS: Dict[str, str] = {"date": ""}


def default_headers() -> Dict[str, str]:
    """Return a fresh copy of the default covered header list."""
    return dict(DEFAULT_HEADERS)


@dataclass
class SignatureParameters:
    """
    Parsed signature metadata

    Attributes:
        key_id: Identifier of the key the signer used
        algorithm: Signature algorithm, None when absent or unrecognised
        headers: Ordered mapping of lower-cased covered header names to
            empty placeholders; the order is the signing string line order
    """
    key_id: str = ""
    algorithm: Optional[SignatureAlgorithm] = None
    headers: Dict[str, str] = field(default_factory=default_headers)


@dataclass
class VerificationParameters:
    """
    Everything extracted from a request that is needed to verify it

    Attributes:
        sig_params: Parsed signature metadata, None before parsing starts
        signature: Raw signature value as sent (base64)
    """
    sig_params: Optional[SignatureParameters] = None
    signature: str = ""

    @classmethod
    def from_string(cls, text: str) -> 'VerificationParameters':
        """Parse a signature parameter string, see parse_signature_parameters."""
        from .parser import parse_signature_parameters
        return parse_signature_parameters(text)

    @classmethod
    def from_request(cls, request: Any) -> 'VerificationParameters':
        """Extract and parse the signature parameters carried by a request."""
        from .parser import parse_request
        return parse_request(request)

    def signing_string(self, request: Any) -> str:
        """Build the signing string this signature covers for a request."""
        from .verifier import build_signing_string
        from .request import as_verifiable_request
        headers = self.sig_params.headers if self.sig_params else default_headers()
        return build_signing_string(headers, as_verifiable_request(request))

    def verify(self, key: Union[bytes, str], request: Any) -> bool:
        """Verify the signature against a request with the given key."""
        from .verifier import verify
        return verify(self, key, request)


@dataclass
class VerifiableRequest:
    """
    Request as seen by the verifier

    Attributes:
        method: HTTP method
        path: Request path including the query string, if any
        headers: Request headers, looked up case-insensitively
    """
    method: str
    path: str
    headers: CaseInsensitiveDict = field(default_factory=CaseInsensitiveDict)

    def __post_init__(self):
        """Normalize headers into a case-insensitive mapping"""
        if not self.method:
            raise InvalidRequestError("Request method cannot be empty", {"path": self.path})
        if not isinstance(self.headers, CaseInsensitiveDict):
            self.headers = CaseInsensitiveDict(self.headers or {})

    @classmethod
    def from_url(cls, method: str, url: str, headers: Optional[Dict[str, str]] = None) -> 'VerifiableRequest':
        """Build a request from an absolute URL or a bare path."""
        return cls(method=method, path=request_target_path(url), headers=headers or {})

    def get_header(self, name: str) -> Optional[str]:
        """Case-insensitive header lookup"""
        return self.headers.get(name)

    @property
    def request_target(self) -> str:
        """Value of the (request-target) pseudo-header"""
        return f"{self.method.lower()} {self.path}"


def request_target_path(url: str) -> str:
    """
    Reduce a URL to the path and query used by (request-target).

    Args:
        url: Absolute URL or origin-form path

    Returns:
        str: Path with ``?query`` appended when a query is present
    """
    parts = urlsplit(url)
    if not (parts.scheme and parts.netloc):
        # Origin-form targets are taken verbatim; "//foo" is a path, not a host
        return url.split("#", 1)[0] or "/"
    path = parts.path or "/"
    if parts.query:
        return f"{path}?{parts.query}"
    return path
