from .http_client import CookieJar, HubHttpClient

__all__ = ["CookieJar", "HubHttpClient"]
