"""
Shared pytest fixtures.

The Gemini client is replaced by a MagicMock whose ``aio.models`` methods are
AsyncMocks, so every stage runs for real against canned provider answers.
"""

import json
import os
import tempfile
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

# keep session files written on import out of the working tree
os.environ.setdefault("KATHA_DATA_DIR", tempfile.mkdtemp(prefix="katha-sessions-"))


def text_response(payload) -> SimpleNamespace:
    """Fake generate_content response carrying JSON (or raw text) in .text."""
    text = payload if isinstance(payload, str) else json.dumps(payload)
    return SimpleNamespace(text=text)


def imagen_response(data: bytes = b"\xff\xd8fake-jpeg", mime_type: str = "image/jpeg") -> SimpleNamespace:
    image = SimpleNamespace(image_bytes=data, mime_type=mime_type)
    return SimpleNamespace(generated_images=[SimpleNamespace(image=image)])


LEXICON_STORY = {
    "lexicon": {
        "cultivationStages": [{"original": "Qi Condensation", "indianized": "Prana Dharana"}],
        "techniques": [{"original": "Sword Qi", "indianized": "Khadga Shakti"}],
        "names": [
            {"original": "young warrior", "indianized": "Arjun"},
            {"original": "forest", "indianized": "Dandakaranya"},
            {"original": "glowing sword", "indianized": "Chandrahas"},
        ],
        "system": [{"original": "Quest", "indianized": "Vrata"}],
    },
    "rewrittenStory": (
        "In the depths of Dandakaranya, young Arjun followed a silver light "
        "until he found Chandrahas, the moon-bladed sword, resting on a banyan root."
    ),
}

PLOT_OPTIONS = {
    "plotOptions": [f"Arjun pursues path number {i}. A rishi tests his resolve." for i in range(1, 11)]
}

IMAGE_PROMPTS = {
    "character_prompts": ["Arjun, a lean young kshatriya with a topknot and dhoti"],
    "scene_prompts": [
        "Arjun walking through misty Dandakaranya at dawn",
        "Chandrahas glowing on a banyan root",
        "Arjun raising Chandrahas under a full moon",
    ],
}

VIDEO_SCRIPT = {
    "title": "Chandrahas: The Moon Blade of Dandakaranya",
    "script": [
        {"scene": 1, "visual": "Mist over the forest", "dialogue": "Narrator: Long ago..."},
        {"scene": 2, "visual": "Arjun finds the sword", "dialogue": "Arjun: What light is this?"},
    ],
    "veoPrompts": [
        {"scene": 1, "prompt": "Slow dolly through misty Indian forest at dawn, cinematic"},
        {"scene": 2, "prompt": "Close-up of a young warrior lifting a glowing sword"},
    ],
}


@pytest.fixture
def fake_client():
    client = MagicMock()
    client.aio.models.generate_content = AsyncMock()
    client.aio.models.generate_images = AsyncMock(return_value=imagen_response())
    return client
