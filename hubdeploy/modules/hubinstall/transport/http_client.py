"""Session-keeping HTTP client for the hub management endpoints."""

from __future__ import annotations

import logging
from typing import Dict, Iterable, Iterator, Mapping, Optional, Tuple

import httpx

from hubdeploy.modules.hubinstall.domain import HttpResult
from hubdeploy.settings import Settings


class CookieJar:
    """Cookie name -> value store shared by every request of one client.

    Not scoped by domain or path and without expiry tracking; one jar talks to
    one hub.
    """

    def __init__(self) -> None:
        self._cookies: Dict[str, str] = {}
        self.log = logging.getLogger(self.__class__.__name__)

    def __len__(self) -> int:
        return len(self._cookies)

    def __iter__(self) -> Iterator[Tuple[str, str]]:
        return iter(self._cookies.items())

    def get(self, name: str) -> Optional[str]:
        return self._cookies.get(name)

    def store(self, set_cookie_headers: Iterable[str]) -> None:
        for cookie in set_cookie_headers:
            eq = cookie.find("=")
            if eq <= 0:
                continue
            name = cookie[:eq].strip()
            semi = cookie.find(";", eq + 1)
            value = cookie[eq + 1:semi] if semi > eq else cookie[eq + 1:]
            self.log.debug("store: name: %s, value: %s", name, value)
            self._cookies[name] = value

    def header(self) -> Optional[str]:
        if not self._cookies:
            return None
        return "; ".join(f"{name}={value}" for name, value in self._cookies.items())


class HubHttpClient:
    """GET/POST wrapper that never raises past its boundary.

    Every call returns an ``HttpResult``; connection failures come back with
    status -1 and the error text as body.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        client: Optional[httpx.Client] = None,
        cookie_jar: Optional[CookieJar] = None,
    ) -> None:
        settings = settings or Settings(_env_file=None)
        self.log = logging.getLogger(self.__class__.__name__)
        self.cookies = cookie_jar or CookieJar()
        self._owns_client = client is None
        self._client = client or httpx.Client(
            timeout=httpx.Timeout(settings.read_timeout, connect=settings.connect_timeout),
            follow_redirects=False,
        )

    def get(self, url: str, headers: Optional[Mapping[str, str]] = None) -> HttpResult:
        return self._send("GET", url, headers)

    def post(self, url: str, body: str, headers: Optional[Mapping[str, str]] = None) -> HttpResult:
        return self._send("POST", url, headers, content=body.encode("utf-8"))

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "HubHttpClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _send(
        self,
        method: str,
        url: str,
        headers: Optional[Mapping[str, str]],
        content: Optional[bytes] = None,
    ) -> HttpResult:
        try:
            request = httpx.Request(method, url, headers=self._prepare_headers(url, headers), content=content)
            response = self._client.send(request, stream=True)
            try:
                self.cookies.store(response.headers.get_list("set-cookie"))
                body = self._read_body(response)
            finally:
                response.close()
        except (httpx.HTTPError, httpx.InvalidURL, OSError) as exc:
            self.log.error("%s %s: error connecting to hub: %s", method, url, exc)
            return HttpResult(status=-1, body=str(exc) or exc.__class__.__name__)

        status = response.status_code
        if method == "POST" and status != 200:
            self.log.error("POST %s: http:%s: %s", url, status, body)
        else:
            self.log.debug("%s %s: http:%s, bodyLen:%s", method, url, status, len(body or ""))
        return HttpResult(status=status, body=body)

    def _prepare_headers(self, url: str, headers: Optional[Mapping[str, str]]) -> httpx.Headers:
        prepared = httpx.Headers(dict(headers or {}))
        if "referer" not in prepared:
            prepared["Referer"] = url
        cookie_header = self.cookies.header()
        if cookie_header:
            prepared["Cookie"] = cookie_header
        return prepared

    def _read_body(self, response: httpx.Response) -> Optional[str]:
        # redirects are handed back untouched; the hub uses 302 without a body
        if 300 <= response.status_code < 400:
            return None
        # read() applies the Content-Encoding (gzip, deflate) decoders
        raw = response.read()
        if not raw:
            return None
        return raw.decode("utf-8", errors="replace")
