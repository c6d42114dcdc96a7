"""
Client adapters wrapping third-party SDKs behind the project's error hierarchy.
"""

__all__ = [
    "tweepy_client",
]
