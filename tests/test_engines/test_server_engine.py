"""Tests for the PlantUML server engine (httpx MockTransport)."""

import zlib

import httpx
import pytest

from remder.engines.server import PlantUmlServerEngine, encode_plantuml
from remder.errors.exceptions import EngineError

_ALPHABET = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz-_"


def _decode(encoded: str) -> str:
    bits = "".join(format(_ALPHABET.index(c), "06b") for c in encoded)
    data = bytes(int(bits[i : i + 8], 2) for i in range(0, len(bits) - 7, 8))
    return zlib.decompressobj(-15).decompress(data).decode("utf-8")


def _engine(handler) -> PlantUmlServerEngine:
    client = httpx.Client(transport=httpx.MockTransport(handler))
    return PlantUmlServerEngine("http://plantuml.test/plantuml/", client=client)


class TestEncodePlantuml:
    def test_alphabet_and_padding(self):
        encoded = encode_plantuml("@startuml\nBob -> Alice : hello\n@enduml")
        assert len(encoded) % 4 == 0
        assert set(encoded) <= set(_ALPHABET)

    def test_decodes_back(self):
        source = "@startuml\nBob -> Alice : hello\n@enduml"
        assert _decode(encode_plantuml(source)) == source


class TestPlantUmlServerEngine:
    def test_url(self):
        engine = _engine(lambda request: httpx.Response(200))
        url = engine.url_for("@startuml\nA->B\n@enduml")
        assert url.startswith("http://plantuml.test/plantuml/png/")

    def test_generate_success(self, sample_image_bytes):
        seen = []

        def handler(request):
            seen.append(request.url.path)
            return httpx.Response(200, content=sample_image_bytes)

        image, description = _engine(handler).generate("@startuml\nA->B\n@enduml")
        assert image == sample_image_bytes
        assert description == "PNG diagram, 1x1"
        assert seen[0].startswith("/plantuml/png/")

    def test_diagram_error_header(self, sample_image_bytes):
        def handler(request):
            return httpx.Response(
                400,
                content=sample_image_bytes,
                headers={"X-PlantUML-Diagram-Error": "Syntax Error?"},
            )

        with pytest.raises(EngineError, match="Syntax Error"):
            _engine(handler).generate("bad")

    def test_http_error_status(self):
        with pytest.raises(EngineError, match="HTTP 503"):
            _engine(lambda request: httpx.Response(503)).generate("x")

    def test_empty_body(self):
        with pytest.raises(EngineError, match="empty"):
            _engine(lambda request: httpx.Response(200, content=b"")).generate("x")

    def test_transport_error_retried_then_raised(self):
        calls = []

        def handler(request):
            calls.append(1)
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(EngineError, match="request failed"):
            _engine(handler).generate("x")
        assert len(calls) == 2

    def test_transport_error_recovers_on_retry(self, sample_image_bytes):
        calls = []

        def handler(request):
            calls.append(1)
            if len(calls) == 1:
                raise httpx.ConnectError("refused", request=request)
            return httpx.Response(200, content=sample_image_bytes)

        image, _ = _engine(handler).generate("x")
        assert image == sample_image_bytes
        assert len(calls) == 2
