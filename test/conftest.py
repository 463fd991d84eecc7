import pytest

from storage.kv_store import InMemoryKeyValueStore


class FakeProvider:
    def __init__(self, response_text: str):
        self._response_text = response_text
        self.calls = []

    def generate(self, *, prompt: str, credential: str, params) -> str:
        self.calls.append({"prompt": prompt, "credential": credential, "params": params})
        return self._response_text


@pytest.fixture
def fake_provider_factory():
    def _make(response_text: str):
        return FakeProvider(response_text)
    return _make


@pytest.fixture
def kv():
    return InMemoryKeyValueStore()
