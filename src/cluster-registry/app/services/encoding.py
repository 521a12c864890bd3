"""Base64 sniffing for credential material.

Upstream producers are inconsistent about pre-encoding certificates and keys,
so values are decoded only when they look like base64.
"""

from __future__ import annotations

import base64
import binascii
import re

from ..errors import MalformedEncodingError

BASE64_PATTERN = re.compile(r"^([A-Za-z0-9+/]{4})*([A-Za-z0-9+/]{3}=|[A-Za-z0-9+/]{2}==)?$")


def looks_like_base64(value: str) -> bool:
    """Return True if value has the shape of standard padded base64."""
    return BASE64_PATTERN.fullmatch(value) is not None


def sniff_and_decode(value: str) -> bytes:
    """Decode value if it looks like base64, otherwise return its raw bytes.

    A raw secret that happens to be valid base64 is decoded too; there is no
    way to tell the two apart from the string alone.

    Raises:
        MalformedEncodingError: value matched the base64 shape but did not decode
    """
    if not looks_like_base64(value):
        return value.encode()

    # Pattern matches always decode with the current decoder
    try:
        return base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError) as e:
        raise MalformedEncodingError(f"Value is not valid base64: {e!s}") from e
