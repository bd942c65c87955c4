"""Shared fixtures for httpsignatures tests"""

import pytest

from helpers import TEST_DATE, TEST_KEY, hmac_sha256_b64, signature_params


@pytest.fixture
def test_key():
    return TEST_KEY


@pytest.fixture
def test_date():
    return TEST_DATE


@pytest.fixture
def test_hash():
    """Signature over the default signing string ``date: <TEST_DATE>``"""
    return hmac_sha256_b64(TEST_KEY, f"date: {TEST_DATE}")


@pytest.fixture
def test_signature(test_hash):
    """Parameter string for the default signing string"""
    return signature_params(test_hash)
