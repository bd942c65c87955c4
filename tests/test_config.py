"""
Unit tests for verifier configuration loading
"""

import json

import pytest

from httpsignatures import (
    SignatureAlgorithm,
    VerifierConfig,
    ConfigurationError,
    ErrorCodes,
    load_config_from_json,
    load_config_from_file,
    load_config_from_env,
)


class TestVerifierConfig:
    """Test configuration defaults and validation"""

    def test_defaults(self):
        config = VerifierConfig()
        assert config.authorization_header == "Authorization"
        assert config.signature_header == "Signature"
        assert config.auth_scheme == "Signature "
        assert config.required_headers == []
        assert config.allowed_algorithms == ["hmac-sha256"]
        assert config.allowed_algorithm_set() == {SignatureAlgorithm.HMAC_SHA256}
        assert config.log_signing_string is False
        assert config.log_level == "WARNING"

    def test_required_headers_lower_cased(self):
        config = VerifierConfig(required_headers=["Date", "(request-target)"])
        assert config.required_headers == ["date", "(request-target)"]

    def test_unknown_algorithm_rejected(self):
        with pytest.raises(ConfigurationError) as exc_info:
            VerifierConfig(allowed_algorithms=["rsa-sha256"])
        assert exc_info.value.error_code == ErrorCodes.INVALID_CONFIG
        assert exc_info.value.details["unknown_algorithms"] == ["rsa-sha256"]

    def test_empty_algorithms_rejected(self):
        with pytest.raises(ConfigurationError):
            VerifierConfig(allowed_algorithms=[])

    def test_empty_names_rejected(self):
        with pytest.raises(ConfigurationError):
            VerifierConfig(signature_header="")
        with pytest.raises(ConfigurationError):
            VerifierConfig(auth_scheme="")

    def test_log_level(self):
        assert VerifierConfig(log_level="debug").log_level == "DEBUG"
        with pytest.raises(ConfigurationError):
            VerifierConfig(log_level="chatty")

    def test_dict_round_trip(self):
        config = VerifierConfig(required_headers=["date"], log_signing_string=True)
        assert VerifierConfig.from_dict(config.to_dict()) == config

    def test_unknown_keys_rejected(self):
        with pytest.raises(ConfigurationError) as exc_info:
            VerifierConfig.from_dict({"required_header": ["date"]})
        assert exc_info.value.details["unknown_keys"] == ["required_header"]

    def test_wrong_types_rejected(self):
        with pytest.raises(ConfigurationError):
            VerifierConfig.from_dict({"log_level": 10})


class TestConfigLoaders:
    """Test JSON, file and environment loaders"""

    def test_from_json(self):
        config = load_config_from_json(json.dumps({"required_headers": ["Host"]}))
        assert config.required_headers == ["host"]

    def test_invalid_json(self):
        with pytest.raises(ConfigurationError):
            load_config_from_json("{not json")

    def test_json_must_be_object(self):
        with pytest.raises(ConfigurationError):
            load_config_from_json("[]")

    def test_from_file(self, tmp_path):
        path = tmp_path / "httpsig.json"
        path.write_text(json.dumps({"signature_header": "X-Signature"}), encoding="utf-8")
        assert load_config_from_file(path).signature_header == "X-Signature"

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError) as exc_info:
            load_config_from_file(tmp_path / "missing.json")
        assert "missing.json" in exc_info.value.details["path"]

    def test_from_env(self):
        config = load_config_from_env({
            "HTTPSIG_REQUIRED_HEADERS": "Date, (request-target)",
            "HTTPSIG_LOG_SIGNING_STRING": "true",
            "HTTPSIG_AUTH_SCHEME": "HMAC ",
            "HTTPSIG_LOG_LEVEL": "info",
            "UNRELATED": "ignored",
        })
        assert config.required_headers == ["date", "(request-target)"]
        assert config.log_signing_string is True
        assert config.auth_scheme == "HMAC "
        assert config.log_level == "INFO"

    def test_from_empty_env(self):
        assert load_config_from_env({}) == VerifierConfig()

    def test_env_rejects_unknown_algorithm(self):
        with pytest.raises(ConfigurationError):
            load_config_from_env({"HTTPSIG_ALLOWED_ALGORITHMS": "hmac-sha256 hmac-sha1"})
