"""Shared constants and reference signing helpers for httpsignatures tests"""

import base64
import hashlib
import hmac

TEST_DATE = "Thu, 05 Jan 2014 21:31:40 GMT"
TEST_KEY = b"U29tZSBzZWNyZXQga2V5"
TEST_KEY_ID = "Test"


def hmac_sha256_b64(key: bytes, message: str) -> str:
    """Reference HMAC-SHA256 signature, computed independently of the package"""
    digest = hmac.new(key, message.encode("utf-8"), hashlib.sha256).digest()
    return base64.b64encode(digest).decode("ascii")


def signature_params(signature: str, headers: str = None, key_id: str = TEST_KEY_ID) -> str:
    params = f'keyId="{key_id}",algorithm="hmac-sha256",'
    if headers is not None:
        params += f'headers="{headers}",'
    return params + f'signature="{signature}"'
