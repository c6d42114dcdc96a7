"""
Service layer modules orchestrate the upload and publishing workflows
on top of the signer, the transport and the client adapters.
"""

__all__ = [
    "media_service",
    "tweet_service",
]
