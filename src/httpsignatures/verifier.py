"""
Signature verification engine

This module rebuilds the signing string from the headers a signature covers,
recomputes the signature with the declared algorithm and compares it against
the supplied value in constant time.
"""

import base64
import binascii
import logging
from typing import Any, Callable, Iterable, Optional, Union

from cryptography.hazmat.primitives import constant_time

from .types import (
    SignatureAlgorithm,
    VerifiableRequest,
    VerificationParameters,
    REQUEST_TARGET,
)
from .algorithms import compute_signature
from .config import VerifierConfig
from .exceptions import (
    InsufficientHeadersError,
    KeyNotFoundError,
    MissingRequiredHeaderError,
    SignatureDecodeError,
    UnsupportedAlgorithmError,
)
from .parser import parse_request
from .request import as_verifiable_request

logger = logging.getLogger(__name__)

KeyResolver = Callable[[str], Optional[Union[bytes, str]]]


def build_signing_string(headers: Iterable[str], request: VerifiableRequest) -> str:
    """
    Build the canonical signing string.

    Args:
        headers: Covered header names in signing order (lower-cased)
        request: Request to read header values from

    Returns:
        str: ``name: value`` lines joined with ``\\n``

    Raises:
        MissingRequiredHeaderError: If a covered header is absent
    """
    lines = []
    for name in headers:
        if name == REQUEST_TARGET:
            value = request.request_target
        else:
            value = request.get_header(name)
            if value is None:
                raise MissingRequiredHeaderError(name)
        lines.append(f"{name}: {value}")
    return "\n".join(lines)


def encode_signature(raw: bytes) -> str:
    """Encode a raw signature as standard, padded base64"""
    return base64.b64encode(raw).decode("ascii")


def _check_signature_encoding(signature: str) -> bytes:
    try:
        encoded = signature.encode("ascii")
        base64.b64decode(encoded, validate=True)
    except (UnicodeEncodeError, binascii.Error) as e:
        raise SignatureDecodeError(
            "Signature is not valid base64",
            {"original_error": str(e)}
        )
    return encoded


def verify(
    params: VerificationParameters,
    key: Union[bytes, str],
    request: Any,
    allowed_algorithms: Optional[Iterable[SignatureAlgorithm]] = None,
) -> bool:
    """
    Verify parsed signature parameters against a request.

    Args:
        params: Result of parsing the request's signature header
        key: Secret key the signer used
        request: Request object, adapted with as_verifiable_request
        allowed_algorithms: Restrict accepted algorithms (all registered if None)

    Returns:
        bool: True if the signature matches, False if it is well-formed but wrong

    Raises:
        UnsupportedAlgorithmError: If the algorithm is missing or not allowed
        MissingRequiredHeaderError: If a covered header is absent
        InvalidKeyError: If the key is unusable
        SignatureDecodeError: If the signature is not valid base64
    """
    sig_params = params.sig_params
    if sig_params is None or sig_params.algorithm is None:
        raise UnsupportedAlgorithmError(None)

    algorithm = sig_params.algorithm
    if allowed_algorithms is not None and algorithm not in set(allowed_algorithms):
        raise UnsupportedAlgorithmError(algorithm.value)

    signing_string = build_signing_string(sig_params.headers, as_verifiable_request(request))
    supplied = _check_signature_encoding(params.signature)
    expected = encode_signature(
        compute_signature(algorithm, key, signing_string.encode("utf-8"))
    ).encode("ascii")

    return constant_time.bytes_eq(expected, supplied)


class SignatureVerifier:
    """
    Verifier bound to a configuration and an optional key resolver

    The resolver receives the keyId from the signature and returns the key
    material, or None when the key is unknown.
    """

    def __init__(self, config: Optional[VerifierConfig] = None, key_resolver: Optional[KeyResolver] = None):
        self.config = config or VerifierConfig()
        self.key_resolver = key_resolver

    def parse(self, request: Any) -> VerificationParameters:
        """Extract and parse signature parameters using the configured header names"""
        return parse_request(
            request,
            authorization_header=self.config.authorization_header,
            signature_header=self.config.signature_header,
            auth_scheme=self.config.auth_scheme,
        )

    def check_required_headers(self, params: VerificationParameters) -> None:
        """
        Enforce the configured required_headers policy.

        Raises:
            InsufficientHeadersError: If the signature leaves a required header uncovered
        """
        covered = params.sig_params.headers if params.sig_params else {}
        missing = [name for name in self.config.required_headers if name not in covered]
        if missing:
            raise InsufficientHeadersError(missing)

    def resolve_key(self, key_id: str) -> Union[bytes, str]:
        if self.key_resolver is None:
            raise KeyNotFoundError(key_id)
        key = self.key_resolver(key_id)
        if key is None:
            raise KeyNotFoundError(key_id)
        return key

    def verify_request(self, request: Any, key: Optional[Union[bytes, str]] = None) -> bool:
        """
        Verify a signed request end to end.

        Args:
            request: Request object carrying the signature header
            key: Key to verify with; resolved from the keyId when omitted

        Returns:
            bool: True if the signature is valid
        """
        verifiable = as_verifiable_request(request)
        params = self.parse(verifiable)
        self.check_required_headers(params)

        sig_params = params.sig_params
        logger.debug(
            f"Verifying signature for keyId={sig_params.key_id} "
            f"algorithm={sig_params.algorithm.value} headers={list(sig_params.headers)}"
        )
        if self.config.log_signing_string:
            logger.debug(f"Signing string: {build_signing_string(sig_params.headers, verifiable)!r}")

        if key is None:
            key = self.resolve_key(sig_params.key_id)

        valid = verify(params, key, verifiable, self.config.allowed_algorithm_set())
        if not valid:
            logger.debug(f"Signature mismatch for keyId={sig_params.key_id}")
        return valid


def create_verifier(config: Optional[VerifierConfig] = None,
                    key_resolver: Optional[KeyResolver] = None) -> SignatureVerifier:
    """Create a SignatureVerifier"""
    return SignatureVerifier(config, key_resolver)


def verify_request(request: Any, key: Union[bytes, str], config: Optional[VerifierConfig] = None) -> bool:
    """Extract, parse and verify the signature carried by a request with the given key"""
    return SignatureVerifier(config).verify_request(request, key)
