"""
Tests for run_sync, the bridge between Streamlit's script thread and the
async stages.

The client is cached for the whole app, so consecutive stage runs must share
one event loop. The second half of this module drives a real genai.Client
against a local HTTP server to exercise the SDK's connection pool.
"""

import asyncio
import json
import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import pytest
from google import genai

from katha.data_models import Difficulty
from katha.errors import ProviderError
from katha.pipeline import generate_plot_options, generate_story_and_lexicon, run_sync
from conftest import LEXICON_STORY, PLOT_OPTIONS


async def _running_loop():
    return asyncio.get_running_loop()


async def _boom():
    raise ProviderError("plots", "upstream unavailable")


def test_calls_share_one_loop():
    first = run_sync(_running_loop())
    second = run_sync(_running_loop())
    assert first is second
    assert first.is_running()


def test_errors_propagate_to_caller():
    with pytest.raises(ProviderError) as exc:
        run_sync(_boom())
    assert exc.value.stage == "plots"
    # the loop survives a failed stage
    assert run_sync(_running_loop()).is_running()


def _gemini_answer(payload) -> bytes:
    body = {
        "candidates": [
            {
                "content": {"role": "model", "parts": [{"text": json.dumps(payload)}]},
                "finishReason": "STOP",
                "index": 0,
            }
        ]
    }
    return json.dumps(body).encode("utf-8")


class _GeminiStub(BaseHTTPRequestHandler):
    """Answers every generateContent call with the canned payload of the server."""

    def do_POST(self):
        length = int(self.headers.get("Content-Length") or 0)
        self.rfile.read(length)
        self.server.requests.append(self.path)
        data = _gemini_answer(self.server.payload)
        self.send_response(200)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(data)))
        self.end_headers()
        self.wfile.write(data)

    def log_message(self, format, *args):
        pass


@pytest.fixture
def gemini_server():
    server = ThreadingHTTPServer(("127.0.0.1", 0), _GeminiStub)
    server.payload = PLOT_OPTIONS
    server.requests = []
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    yield server
    server.shutdown()
    server.server_close()


@pytest.fixture
def real_client(gemini_server):
    port = gemini_server.server_address[1]
    return genai.Client(api_key="test-key", http_options={"base_url": f"http://127.0.0.1:{port}"})


def test_cached_client_survives_repeated_stages(gemini_server, real_client):
    for _ in range(3):
        options = run_sync(generate_plot_options(real_client, "story", Difficulty.MEDIUM))
        assert options == PLOT_OPTIONS["plotOptions"]
    assert len(gemini_server.requests) == 3
    assert all(path.endswith(":generateContent") for path in gemini_server.requests)


def test_cached_client_runs_different_stages(gemini_server, real_client):
    gemini_server.payload = LEXICON_STORY
    story = run_sync(generate_story_and_lexicon(real_client, "seed", "Vedic", Difficulty.EASY))
    gemini_server.payload = PLOT_OPTIONS
    options = run_sync(generate_plot_options(real_client, story.rewritten_story, Difficulty.EASY))
    assert len(options) == 10
