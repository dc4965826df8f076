import json

import httpx
import pytest
import respx

from motia_studio.errors import GenerationError
from motia_studio.generation import CompletionClient, LLMCodeGenerator
from motia_studio.models import Language

BASE_URL = "https://llm.test/v1"
DESCRIPTION = "A todo list API with due dates"


def completion(content: str) -> dict:
    return {
        "choices": [{"message": {"role": "assistant", "content": content}}],
        "usage": {"total_tokens": 42},
    }


@pytest.fixture
def generator():
    client = CompletionClient(api_key="gsk_test", base_url=BASE_URL, model="test-model")
    return LLMCodeGenerator(client)


@pytest.mark.asyncio
async def test_generates_files_from_completion(generator):
    content = (
        "===FILE: src/workflow.ts===\nexport const w = 1;\n===END FILE===\n"
        "===FILE: README.md===\n# Todo\n===END FILE==="
    )
    async with respx.mock(base_url=BASE_URL) as respx_mock:
        route = respx_mock.post("/chat/completions").mock(
            return_value=httpx.Response(200, json=completion(content))
        )

        files = await generator.generate_code(DESCRIPTION, Language.TYPESCRIPT, ["auth"])

    assert [f.path for f in files] == ["src/workflow.ts", "README.md"]
    assert [f.language for f in files] == ["typescript", "markdown"]

    request = route.calls.last.request
    assert request.headers["Authorization"] == "Bearer gsk_test"
    payload = json.loads(request.content)
    assert payload["model"] == "test-model"
    assert payload["max_tokens"] == 4000  # noqa: PLR2004
    assert DESCRIPTION in payload["messages"][1]["content"]
    assert "Required features: auth" in payload["messages"][1]["content"]


@pytest.mark.asyncio
async def test_falls_back_when_no_blocks(generator):
    async with respx.mock(base_url=BASE_URL) as respx_mock:
        respx_mock.post("/chat/completions").mock(
            return_value=httpx.Response(200, json=completion("Sure! Here's some prose."))
        )

        files = await generator.generate_code(DESCRIPTION, "python")

    assert [f.path for f in files] == [
        "src/workflow.py",
        "src/steps.py",
        "src/config.py",
        "README.md",
    ]
    assert DESCRIPTION in files[0].content


@pytest.mark.asyncio
async def test_empty_completion_fails(generator):
    async with respx.mock(base_url=BASE_URL) as respx_mock:
        respx_mock.post("/chat/completions").mock(
            return_value=httpx.Response(200, json=completion("   "))
        )

        with pytest.raises(GenerationError) as exc_info:
            await generator.generate_code(DESCRIPTION, Language.TYPESCRIPT)

    assert exc_info.value.reason == "failed"


@pytest.mark.asyncio
async def test_missing_key_is_credentials_error():
    generator = LLMCodeGenerator(CompletionClient(api_key="  ", base_url=BASE_URL))

    async with respx.mock(base_url=BASE_URL, assert_all_called=False) as respx_mock:
        route = respx_mock.post("/chat/completions")

        with pytest.raises(GenerationError) as exc_info:
            await generator.generate_code(DESCRIPTION, Language.TYPESCRIPT)

    assert exc_info.value.reason == "credentials"
    assert "GROQ_API_KEY" in str(exc_info.value)
    assert not route.called


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("status", "body", "reason"),
    [
        (401, {"error": {"message": "Invalid API Key"}}, "credentials"),
        (429, {"error": {"message": "Too many requests"}}, "rate_limit"),
        (400, {"error": {"message": "You exceeded your current quota"}}, "rate_limit"),
        (500, {"error": {"message": "Internal error"}}, "failed"),
    ],
)
async def test_http_errors_are_classified(generator, status, body, reason):
    async with respx.mock(base_url=BASE_URL) as respx_mock:
        respx_mock.post("/chat/completions").mock(
            return_value=httpx.Response(status, json=body)
        )

        with pytest.raises(GenerationError) as exc_info:
            await generator.generate_code(DESCRIPTION, Language.TYPESCRIPT)

    assert exc_info.value.reason == reason


@pytest.mark.asyncio
async def test_server_error_message_includes_detail(generator):
    async with respx.mock(base_url=BASE_URL) as respx_mock:
        respx_mock.post("/chat/completions").mock(
            return_value=httpx.Response(503, json={"error": {"message": "overloaded"}})
        )

        with pytest.raises(GenerationError, match="overloaded"):
            await generator.generate_code(DESCRIPTION, Language.TYPESCRIPT)


@pytest.mark.asyncio
async def test_transport_error_is_generation_error(generator):
    async with respx.mock(base_url=BASE_URL) as respx_mock:
        respx_mock.post("/chat/completions").mock(side_effect=httpx.ConnectError("refused"))

        with pytest.raises(GenerationError) as exc_info:
            await generator.generate_code(DESCRIPTION, Language.TYPESCRIPT)

    assert exc_info.value.reason == "failed"
    assert "refused" in str(exc_info.value)


@pytest.mark.asyncio
async def test_malformed_response_is_generation_error(generator):
    async with respx.mock(base_url=BASE_URL) as respx_mock:
        respx_mock.post("/chat/completions").mock(
            return_value=httpx.Response(200, json={"unexpected": True})
        )

        with pytest.raises(GenerationError, match="Invalid completion response format"):
            await generator.generate_code(DESCRIPTION, Language.TYPESCRIPT)
