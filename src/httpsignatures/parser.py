"""
Signature parameter parsing

Reads the comma separated ``name="value"`` list carried by the Authorization
(``Signature`` scheme) or Signature header into VerificationParameters.
Parsing is deliberately lenient: unquoted or malformed segments and unknown
parameter names are skipped. Validation of the result is strict and runs in a
fixed order: signature, then algorithm, then keyId.
"""

from typing import Any, Dict, Iterator, List, Optional, Tuple

from .types import (
    SignatureAlgorithm,
    SignatureParameters,
    VerificationParameters,
    HEADER_AUTHORIZATION,
    HEADER_SIGNATURE,
    AUTH_SCHEME,
    default_headers,
)
from .exceptions import (
    MissingSignatureError,
    MissingAlgorithmError,
    MissingKeyIdError,
    MissingSignatureHeaderError,
)
from .request import as_verifiable_request

PARAM_KEY_ID = "keyid"
PARAM_ALGORITHM = "algorithm"
PARAM_HEADERS = "headers"
PARAM_SIGNATURE = "signature"


def split_parameters(text: str) -> List[str]:
    """Split a parameter string on the commas that are not inside double quotes."""
    segments = []
    current = []
    quoted = False
    for char in text:
        if char == '"':
            quoted = not quoted
        elif char == "," and not quoted:
            segments.append("".join(current))
            current = []
            continue
        current.append(char)
    segments.append("".join(current))
    return segments


def iter_parameters(text: str) -> Iterator[Tuple[str, str]]:
    """
    Yield ``(name, value)`` pairs from a parameter string.

    Names are stripped and lower-cased, values are returned without their
    surrounding double quotes. Segments without ``=`` or without a quoted value
    are skipped.
    """
    for segment in split_parameters(text):
        name, sep, value = segment.partition("=")
        if not sep:
            continue
        name = name.strip().lower()
        value = value.strip()
        if len(value) < 2 or not (value.startswith('"') and value.endswith('"')):
            continue
        yield name, value[1:-1]


def parse_header_list(value: str) -> Dict[str, str]:
    """
    Build the ordered covered-header mapping from a headers parameter value.

    Repeated names keep the position of their first occurrence. An empty value
    yields the default list.
    """
    headers: Dict[str, str] = {}
    for name in value.split():
        headers[name.lower()] = ""
    return headers or default_headers()


def parse_algorithm(value: str) -> Optional[SignatureAlgorithm]:
    """Map an algorithm token to SignatureAlgorithm, None if unsupported"""
    try:
        return SignatureAlgorithm(value)
    except ValueError:
        return None


def parse_signature_parameters(text: str) -> VerificationParameters:
    """
    Parse a signature parameter string.

    Args:
        text: Parameter list, e.g.
            ``keyId="Test",algorithm="hmac-sha256",signature="..."``

    Returns:
        VerificationParameters: Populated parameters

    Raises:
        MissingSignatureError: If the signature parameter is empty
        MissingAlgorithmError: If the algorithm is absent or unsupported
        MissingKeyIdError: If the keyId parameter is empty

    Each error carries the partial result in its ``parameters`` attribute.
    """
    sig_params = SignatureParameters()
    result = VerificationParameters(sig_params=sig_params)

    for name, value in iter_parameters(text):
        if name == PARAM_KEY_ID:
            sig_params.key_id = value
        elif name == PARAM_ALGORITHM:
            sig_params.algorithm = parse_algorithm(value)
        elif name == PARAM_HEADERS:
            sig_params.headers = parse_header_list(value)
        elif name == PARAM_SIGNATURE:
            result.signature = value

    if not result.signature:
        raise MissingSignatureError(result)
    if sig_params.algorithm is None:
        raise MissingAlgorithmError(result)
    if not sig_params.key_id:
        raise MissingKeyIdError(result)

    return result


def extract_signature_header(
    request: Any,
    authorization_header: str = HEADER_AUTHORIZATION,
    signature_header: str = HEADER_SIGNATURE,
    auth_scheme: str = AUTH_SCHEME,
) -> str:
    """
    Find the signature parameter text carried by a request.

    The Authorization header is used when it starts with the scheme prefix
    (case-sensitive); otherwise the Signature header is used as-is.

    Raises:
        MissingSignatureHeaderError: If neither header carries a signature
    """
    verifiable = as_verifiable_request(request)

    authorization = verifiable.get_header(authorization_header)
    if authorization is not None and authorization.startswith(auth_scheme):
        return authorization[len(auth_scheme):]

    signature = verifiable.get_header(signature_header)
    if signature is not None:
        return signature

    raise MissingSignatureHeaderError(details={
        "authorization_present": authorization is not None,
        "expected_headers": [authorization_header, signature_header],
    })


def parse_request(request: Any, **header_options: str) -> VerificationParameters:
    """Extract the signature header from a request and parse it."""
    return parse_signature_parameters(extract_signature_header(request, **header_options))
