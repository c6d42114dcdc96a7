"""
tweetbot: OAuth 1.0a request signing and chunked media upload for the Twitter API.
"""

__version__ = "0.1.0"
