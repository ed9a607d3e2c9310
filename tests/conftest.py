from urllib.parse import parse_qsl

import httpx
import pytest

from phrase_upload.client import PhraseClient

TOKEN = "secret-token"


def form(request: httpx.Request) -> list[tuple[str, str]]:
    """Decode a form-encoded request body, keeping field order."""
    return parse_qsl(request.content.decode("utf-8"), keep_blank_values=True)


class FakePhrase:
    """In-memory stand-in for the Phrase API that records every request."""

    def __init__(self) -> None:
        self.projects = [
            {"id": "p-other", "name": "Other"},
            {"id": "p-demo", "name": "Demo"},
        ]
        self.locales = [
            {"id": "l-de", "name": "de"},
            {"id": "l-en", "name": "en"},
        ]
        self.requests: list[httpx.Request] = []
        # 1-based call number -> status code to answer with
        self.key_failures: dict[int, int] = {}
        self.translation_failures: dict[int, int] = {}

    def calls(self, method: str, suffix: str) -> list[httpx.Request]:
        return [
            r for r in self.requests if r.method == method and r.url.path.endswith(suffix)
        ]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        if request.method == "GET" and path == "/api/v2/projects":
            return httpx.Response(200, json=self.projects)

        if request.method == "GET" and path.endswith("/locales"):
            return httpx.Response(200, json=self.locales)

        if request.method == "POST" and path.endswith("/keys"):
            number = len(self.calls("POST", "/keys"))
            if number in self.key_failures:
                return httpx.Response(self.key_failures[number], json={"message": "invalid"})
            name = dict(form(request))["name"]
            return httpx.Response(201, json={"id": f"k{number}", "name": name})

        if request.method == "POST" and path.endswith("/translations"):
            number = len(self.calls("POST", "/translations"))
            if number in self.translation_failures:
                return httpx.Response(self.translation_failures[number])
            return httpx.Response(201, json={"id": f"t{number}"})

        return httpx.Response(404, json={"message": "Not Found"})

    def http_client(self) -> httpx.Client:
        return httpx.Client(transport=httpx.MockTransport(self.handler))


class RecordingProgress:
    def __init__(self) -> None:
        self.advanced = 0
        self.finished = False

    def advance(self) -> None:
        self.advanced += 1

    def finish(self) -> None:
        self.finished = True


@pytest.fixture
def fake_phrase() -> FakePhrase:
    return FakePhrase()


@pytest.fixture
def phrase_client(fake_phrase: FakePhrase) -> PhraseClient:
    return PhraseClient(token=TOKEN, http_client=fake_phrase.http_client())


@pytest.fixture
def progress() -> RecordingProgress:
    return RecordingProgress()
