"""
Verifier configuration

VerifierConfig holds the header names, scheme prefix and acceptance policy used
by SignatureVerifier. It can be built in code or loaded from a dict, a JSON
string, a JSON file or ``HTTPSIG_*`` environment variables.
"""

import json
import logging
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Set, Union

from .types import (
    SignatureAlgorithm,
    HEADER_AUTHORIZATION,
    HEADER_SIGNATURE,
    AUTH_SCHEME,
)
from .exceptions import ConfigurationError

ENV_PREFIX = "HTTPSIG_"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _default_algorithms() -> List[str]:
    return [algorithm.value for algorithm in SignatureAlgorithm]


@dataclass
class VerifierConfig:
    """
    Configuration for signature verification

    Attributes:
        authorization_header: Header checked first for the signature scheme
        signature_header: Fallback header carrying the parameters directly
        auth_scheme: Case-sensitive prefix of the Authorization value
        required_headers: Headers every accepted signature must cover
        allowed_algorithms: Algorithm tokens accepted at verification time
        log_signing_string: Log the rebuilt signing string at DEBUG level
        log_level: Level the command-line tool configures logging with
    """
    authorization_header: str = HEADER_AUTHORIZATION
    signature_header: str = HEADER_SIGNATURE
    auth_scheme: str = AUTH_SCHEME
    required_headers: List[str] = field(default_factory=list)
    allowed_algorithms: List[str] = field(default_factory=_default_algorithms)
    log_signing_string: bool = False
    log_level: str = "WARNING"

    def __post_init__(self):
        """Normalize and validate configuration"""
        if not self.authorization_header or not self.signature_header:
            raise ConfigurationError("Header names cannot be empty")
        if not self.auth_scheme:
            raise ConfigurationError("Authorization scheme cannot be empty")
        if not self.allowed_algorithms:
            raise ConfigurationError("At least one algorithm must be allowed")

        self.required_headers = [h.lower() for h in self.required_headers]

        known = {algorithm.value for algorithm in SignatureAlgorithm}
        unknown = [a for a in self.allowed_algorithms if a not in known]
        if unknown:
            raise ConfigurationError(
                f"Unknown algorithms: {', '.join(unknown)}",
                {"unknown_algorithms": unknown, "known_algorithms": sorted(known)}
            )

        self.log_level = self.log_level.upper()
        if self.log_level not in _LOG_LEVELS:
            raise ConfigurationError(f"Invalid log level: {self.log_level}")

    def allowed_algorithm_set(self) -> Set[SignatureAlgorithm]:
        """Allowed algorithms as enum members"""
        return {SignatureAlgorithm(a) for a in self.allowed_algorithms}

    def logging_level(self) -> int:
        return getattr(logging, self.log_level)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'VerifierConfig':
        """Build configuration from a dictionary, rejecting unknown keys"""
        names = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - names)
        if unknown:
            raise ConfigurationError(
                f"Unknown configuration keys: {', '.join(unknown)}",
                {"unknown_keys": unknown}
            )
        try:
            return cls(**data)
        except (TypeError, AttributeError) as e:
            raise ConfigurationError(f"Invalid configuration format: {e}", {"original_error": str(e)})

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


def _split_list(value: str) -> List[str]:
    return [item for item in value.replace(",", " ").split() if item]


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


def load_config_from_json(json_string: str) -> VerifierConfig:
    """Load configuration from a JSON object string"""
    try:
        data = json.loads(json_string)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Failed to parse configuration JSON: {e}", {"original_error": str(e)})
    if not isinstance(data, dict):
        raise ConfigurationError("Configuration JSON must be an object")
    return VerifierConfig.from_dict(data)


def load_config_from_file(file_path: Union[str, Path]) -> VerifierConfig:
    """Load configuration from a JSON file"""
    try:
        with open(Path(file_path), 'r', encoding='utf-8') as f:
            json_string = f.read()
    except OSError as e:
        raise ConfigurationError(f"Failed to read configuration file: {e}", {"path": str(file_path)})
    return load_config_from_json(json_string)


def load_config_from_env(environ: Optional[Mapping[str, str]] = None) -> VerifierConfig:
    """
    Load configuration from ``HTTPSIG_*`` environment variables.

    List settings (REQUIRED_HEADERS, ALLOWED_ALGORITHMS) accept comma or
    whitespace separated values. Unset variables keep their defaults.
    """
    environ = os.environ if environ is None else environ
    data: Dict[str, Any] = {}

    for f in fields(VerifierConfig):
        raw = environ.get(ENV_PREFIX + f.name.upper())
        if raw is None:
            continue
        if f.name in ("required_headers", "allowed_algorithms"):
            data[f.name] = _split_list(raw)
        elif f.name == "log_signing_string":
            data[f.name] = _parse_bool(raw)
        else:
            data[f.name] = raw

    return VerifierConfig.from_dict(data)
