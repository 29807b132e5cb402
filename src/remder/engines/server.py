"""PlantUML server engine — fetches PNGs from a PlantUML HTTP server."""

from __future__ import annotations

import logging
import zlib

import httpx
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from remder.errors.exceptions import EngineError
from remder.utils.image import describe_image

logger = logging.getLogger(__name__)

_ALPHABET = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz-_"
_ERROR_HEADER = "X-PlantUML-Diagram-Error"
_DEFAULT_TIMEOUT = 10.0


def encode_plantuml(source: str) -> str:
    """Encode diagram text the way PlantUML server URLs expect.

    Raw deflate, then PlantUML's own 64-character alphabet. A short final
    group is zero-padded, so the result length is always a multiple of 4.
    """
    compressed = zlib.compress(source.encode("utf-8"), level=9)[2:-4]
    result: list[str] = []

    for i in range(0, len(compressed), 3):
        b1, b2, b3 = (compressed[i : i + 3] + b"\x00\x00")[:3]
        result.append(_ALPHABET[b1 >> 2])
        result.append(_ALPHABET[((b1 & 0x3) << 4) | (b2 >> 4)])
        result.append(_ALPHABET[((b2 & 0xF) << 2) | (b3 >> 6)])
        result.append(_ALPHABET[b3 & 0x3F])

    return "".join(result)


class PlantUmlServerEngine:
    """Renders PNG diagrams through a PlantUML server (``/png/<encoded>``)."""

    def __init__(
        self,
        server_url: str,
        timeout: float = _DEFAULT_TIMEOUT,
        client: httpx.Client | None = None,
    ) -> None:
        self._server_url = server_url.rstrip("/")
        self._client = client or httpx.Client(timeout=timeout)

    def url_for(self, source: str) -> str:
        return f"{self._server_url}/png/{encode_plantuml(source)}"

    def generate(self, source: str) -> tuple[bytes, str]:
        url = self.url_for(source)
        try:
            response = self._fetch(url)
        except httpx.HTTPError as e:
            raise EngineError(f"PlantUML server request failed: {e}", original=e) from e

        error = response.headers.get(_ERROR_HEADER)
        if error:
            raise EngineError(f"PlantUML server rejected diagram: {error}")
        if response.status_code != 200:
            raise EngineError(f"PlantUML server returned HTTP {response.status_code}")

        image = response.content
        if not image:
            raise EngineError("PlantUML server returned an empty body")
        try:
            description = describe_image(image)
        except ValueError as e:
            raise EngineError(f"PlantUML server returned invalid PNG: {e}", original=e) from e
        return image, description

    @retry(
        retry=retry_if_exception_type(httpx.TransportError),
        wait=wait_exponential(multiplier=0.1, max=1),
        stop=stop_after_attempt(2),
        reraise=True,
    )
    def _fetch(self, url: str) -> httpx.Response:
        logger.debug("GET %s", url)
        return self._client.get(url)

    def close(self) -> None:
        self._client.close()
