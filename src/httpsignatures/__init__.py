"""
httpsignatures
Verification of HTTP Signatures (draft-cavage) carried in the Authorization
or Signature header of a request
"""

from .version import __version__
from .types import (
    SignatureAlgorithm,
    SignatureParameters,
    VerificationParameters,
    VerifiableRequest,
    DEFAULT_HEADERS,
    REQUEST_TARGET,
    AUTH_SCHEME,
    HEADER_AUTHORIZATION,
    HEADER_SIGNATURE,
)
from .exceptions import (
    ErrorCodes,
    HttpSignaturesError,
    SignatureParameterError,
    MissingSignatureError,
    MissingAlgorithmError,
    MissingKeyIdError,
    MissingSignatureHeaderError,
    MissingRequiredHeaderError,
    UnsupportedAlgorithmError,
    InvalidKeyError,
    KeyNotFoundError,
    SignatureDecodeError,
    InvalidRequestError,
    InsufficientHeadersError,
    ConfigurationError,
)
from .algorithms import ALGORITHMS, compute_signature
from .parser import (
    parse_signature_parameters,
    extract_signature_header,
    parse_request,
)
from .request import as_verifiable_request
from .config import (
    VerifierConfig,
    load_config_from_json,
    load_config_from_file,
    load_config_from_env,
)
from .verifier import (
    SignatureVerifier,
    build_signing_string,
    create_verifier,
    verify,
    verify_request,
)

__all__ = [
    '__version__',

    # Types
    'SignatureAlgorithm',
    'SignatureParameters',
    'VerificationParameters',
    'VerifiableRequest',
    'DEFAULT_HEADERS',
    'REQUEST_TARGET',
    'AUTH_SCHEME',
    'HEADER_AUTHORIZATION',
    'HEADER_SIGNATURE',

    # Errors
    'ErrorCodes',
    'HttpSignaturesError',
    'SignatureParameterError',
    'MissingSignatureError',
    'MissingAlgorithmError',
    'MissingKeyIdError',
    'MissingSignatureHeaderError',
    'MissingRequiredHeaderError',
    'UnsupportedAlgorithmError',
    'InvalidKeyError',
    'KeyNotFoundError',
    'SignatureDecodeError',
    'InvalidRequestError',
    'InsufficientHeadersError',
    'ConfigurationError',

    # Algorithms
    'ALGORITHMS',
    'compute_signature',

    # Parsing
    'parse_signature_parameters',
    'extract_signature_header',
    'parse_request',
    'as_verifiable_request',

    # Configuration
    'VerifierConfig',
    'load_config_from_json',
    'load_config_from_file',
    'load_config_from_env',

    # Verification
    'SignatureVerifier',
    'build_signing_string',
    'create_verifier',
    'verify',
    'verify_request',
]
