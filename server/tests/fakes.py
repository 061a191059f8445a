"""Fake collaborators for gateway tests."""

import copy

from server.config import ServerConfig
from server.errors import SigningFailure
from server.services import InMemoryAnalyticsStore, StaticTokenVerifier, parse_storage_locator
from server.state import AppState

GOOD_TOKEN = "good-token"
AUTH_HEADERS = {"Authorization": f"Bearer {GOOD_TOKEN}"}

THREE_MATCHES = [
    {"id": "clip-a", "title": "Sunset", "s3_url": "https://s3.wasabisys.com/clips/2024/a.mp4", "similarity": 0.91},
    {"id": "clip-b", "title": "Beach", "s3_url": "https://s3.wasabisys.com/clips/2024/b.mp4", "similarity": 0.84},
    {"id": "clip-c", "title": "Waves", "s3_url": "https://s3.wasabisys.com/clips/2024/c.mp4", "similarity": 0.77},
]


class FakeInferenceClient:
    def __init__(self, response=None, error=None):
        self.calls = []
        self.response = response if response is not None else {"matches": []}
        self.error = error

    def predict(self, payload):
        self.calls.append(payload)
        if self.error:
            raise self.error
        return copy.deepcopy(self.response)


class FakeUrlSigner:
    def __init__(self, fail_on=()):
        self.signed = []
        self.fail_on = set(fail_on)

    def sign(self, locator):
        bucket, key = parse_storage_locator(locator)
        if key in self.fail_on:
            raise SigningFailure(f"cannot sign {key}")
        self.signed.append(locator)
        return f"https://signed.example.com/{bucket}/{key}?X-Amz-Expires=3600&X-Amz-Signature=abc"


class FailingStore(InMemoryAnalyticsStore):
    """Every write raises, as if the database were down."""

    def _fail(self, *args, **kwargs):
        raise RuntimeError("database unavailable")

    log_search = _fail
    create_page_session = _fail
    record_interaction = _fail
    open_compilation_session = _fail


def build_state(store, inference, signer):
    config = ServerConfig(inference_url="http://inference.test/predict", api_tokens={GOOD_TOKEN: "user-1"})
    return AppState(
        config,
        analytics_store=store,
        identity_verifier=StaticTokenVerifier(config.api_tokens),
        inference_client=inference,
        url_signer=signer,
    )
