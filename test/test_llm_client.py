import pytest

from llm.llm_client import LLMClient
from llm.schemas import GenerationParams
from syllabus_deadlines.exceptions import CredentialError, MalformedResponseError


@pytest.mark.parametrize("credential", ["", "   ", None])
def test_missing_credential_fails_before_network(fake_provider_factory, credential):
    provider = fake_provider_factory("[]")
    client = LLMClient(provider=provider)
    with pytest.raises(CredentialError):
        client.generate_text("prompt", credential)
    assert provider.calls == []


def test_generate_text_forwards_params(fake_provider_factory):
    provider = fake_provider_factory("raw output")
    params = GenerationParams(model="gemini-test", temperature=0.0, max_output_tokens=50)
    client = LLMClient(provider=provider, params=params)
    out = client.generate_text("the prompt", " key-123 ")
    assert out == "raw output"
    call = provider.calls[0]
    assert call["prompt"] == "the prompt"
    assert call["credential"] == "key-123"
    assert call["params"] == params


def test_per_call_params_override_defaults(fake_provider_factory):
    provider = fake_provider_factory("x")
    client = LLMClient(provider=provider)
    override = GenerationParams(max_output_tokens=10)
    client.generate_text("p", "k", params=override)
    assert provider.calls[0]["params"].max_output_tokens == 10


def test_extract_drafts(fake_provider_factory):
    provider = fake_provider_factory(
        '```json\n[{"title":"Send essay","date":"2026-01-25","type":"assignment"}]\n```'
    )
    client = LLMClient(provider=provider)
    drafts = client.extract_drafts("Essay due Jan 25", "key", default_year=2026)
    assert drafts == [{"title": "Send essay", "date": "2026-01-25", "type": "assignment"}]
    assert "Essay due Jan 25" in provider.calls[0]["prompt"]
    assert "assume 2026" in provider.calls[0]["prompt"]


def test_extract_drafts_garbage_output(fake_provider_factory):
    client = LLMClient(provider=fake_provider_factory("THIS IS NOT JSON AT ALL"))
    with pytest.raises(MalformedResponseError):
        client.extract_drafts("random text", "key", default_year=2026)


def test_default_params_match_reference_settings():
    params = GenerationParams()
    assert params.model == "gemini-1.5-flash-latest"
    assert params.temperature == 0.2
    assert params.max_output_tokens == 2000
