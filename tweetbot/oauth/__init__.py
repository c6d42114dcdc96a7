"""OAuth 1.0a request signing."""

from __future__ import annotations

__all__ = [
    "OAuthSigner",
    "Parameter",
    "create_nonce",
    "join",
    "percent_encode",
]

from .nonce import create_nonce
from .parameter import Parameter, join, percent_encode
from .signer import OAuthSigner
