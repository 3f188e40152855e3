"""Tests for the model catalog."""

import pytest

from ollama_rerank.catalog import (
    ModelLister,
    apply_whitelist,
    format_modified,
    format_size,
    parse_models,
)
from ollama_rerank.errors import HttpStatusError, SchemaError
from ollama_rerank.protocol import ModelsEndpointConfig
from ollama_rerank.transport import HttpTransport
from ollama_rerank.types import ModelOption


class TestFormatting:
    """Tests for option label helpers."""

    def test_format_size(self) -> None:
        """Test bytes are shown as GB with one decimal."""
        assert format_size(2_899_102_924) == "2.7 GB"
        assert format_size(1_073_741_824) == "1.0 GB"

    def test_format_size_unknown(self) -> None:
        """Test missing or zero sizes."""
        assert format_size(None) == "Unknown size"
        assert format_size(0) == "Unknown size"

    def test_format_modified_nanoseconds(self) -> None:
        """Test Ollama's nanosecond timestamps are accepted."""
        assert format_modified("2025-06-10T08:15:30.123456789+02:00") == "2025-06-10 08:15:30"

    def test_format_modified_zulu(self) -> None:
        """Test trailing Z timestamps."""
        assert format_modified("2025-05-01T12:00:00Z") == "2025-05-01 12:00:00"

    def test_format_modified_unknown(self) -> None:
        """Test missing or garbage timestamps."""
        assert format_modified(None) == "Unknown date"
        assert format_modified("yesterday") == "Unknown date"


class TestWhitelist:
    """Tests for name whitelisting."""

    def test_filters_case_insensitively(self) -> None:
        """Test substring matching ignores case."""
        options = [
            ModelOption(name="a", value="dengcao/Qwen3-Reranker-4B:Q5_K_M"),
            ModelOption(name="b", value="llama3.2:3b"),
        ]
        kept = apply_whitelist(options, ["qwen3-reranker"])
        assert [o.value for o in kept] == ["dengcao/Qwen3-Reranker-4B:Q5_K_M"]

    def test_empty_whitelist_keeps_all(self) -> None:
        """Test no whitelist means no filtering."""
        options = [ModelOption(name="b", value="llama3.2:3b")]
        assert apply_whitelist(options, []) == options


class TestParseModels:
    """Tests for listing response parsing."""

    def test_ollama_tags(self, tags_body) -> None:
        """Test /api/tags entries become labelled options."""
        options = parse_models(tags_body, "ollama_tags")
        assert options[0] == ModelOption(
            name="dengcao/Qwen3-Reranker-4B:Q5_K_M (2.7 GB)",
            value="dengcao/Qwen3-Reranker-4B:Q5_K_M",
            description="Last updated: 2025-06-10 08:15:30",
        )
        assert options[1].name == "llama3.2:3b (1.9 GB)"

    def test_ollama_tags_optional_fields(self) -> None:
        """Test entries without size or date."""
        options = parse_models({"models": [{"name": "tiny"}]}, "ollama_tags")
        assert options[0].name == "tiny (Unknown size)"
        assert options[0].description == "Last updated: Unknown date"

    def test_openai_models(self) -> None:
        """Test OpenAI-compatible entries."""
        body = {
            "object": "list",
            "data": [
                {"id": "qwen3:8b", "object": "model", "owned_by": "library"},
                {"id": "bge-reranker"},
            ],
        }
        options = parse_models(body, response_format="openai_models")
        assert options[0] == ModelOption(
            name="qwen3:8b", value="qwen3:8b", description="Owned by: library"
        )
        assert options[1].description == "Unknown owner"

    @pytest.mark.parametrize(
        ("body", "fmt"),
        [
            ({}, "ollama_tags"),
            ({"models": []}, "ollama_tags"),
            ({"models": "qwen3"}, "ollama_tags"),
            ({"data": []}, "openai_models"),
            ({"models": [{"id": "x"}]}, "openai_models"),
            ([], "ollama_tags"),
        ],
    )
    def test_missing_or_empty_array(self, body, fmt) -> None:
        """Test absent, empty or non-array fields raise SchemaError."""
        with pytest.raises(SchemaError):
            parse_models(body, fmt)

    def test_malformed_entry(self) -> None:
        """Test entries without a name raise SchemaError."""
        with pytest.raises(SchemaError, match="malformed"):
            parse_models({"models": [{"size": 12}]}, "ollama_tags")


class TestModelLister:
    """Tests for ModelLister against a mocked server."""

    @pytest.mark.asyncio
    async def test_list_with_whitelist(self, httpx_mock, base_url, tags_body) -> None:
        """Test the whitelist drops non-reranker models."""
        httpx_mock.add_response(url=f"{base_url}/api/tags", method="GET", json=tags_body)
        config = ModelsEndpointConfig(path="/api/tags", whitelist=["qwen3-reranker"])

        async with HttpTransport(base_url) as transport:
            options = await ModelLister(transport, config).list_models()

        assert [o.value for o in options] == ["dengcao/Qwen3-Reranker-4B:Q5_K_M"]

    @pytest.mark.asyncio
    async def test_list_openai_endpoint(self, httpx_mock, base_url) -> None:
        """Test the /models endpoint and its shape."""
        httpx_mock.add_response(
            url=f"{base_url}/models",
            json={"data": [{"id": "qwen3:8b"}, {"id": "llama3.2:3b"}]},
        )
        config = ModelsEndpointConfig(path="/models", format="openai_models")

        async with HttpTransport(base_url) as transport:
            options = await ModelLister(transport, config).list_models()

        assert [o.value for o in options] == ["qwen3:8b", "llama3.2:3b"]

    @pytest.mark.asyncio
    async def test_http_error(self, httpx_mock, base_url) -> None:
        """Test a failing listing surfaces the status."""
        httpx_mock.add_response(url=f"{base_url}/api/tags", status_code=503)

        async with HttpTransport(base_url) as transport:
            with pytest.raises(HttpStatusError, match=r"Failed to fetch Ollama models \(503"):
                await ModelLister(transport, ModelsEndpointConfig()).list_models()
