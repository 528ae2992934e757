# -*- coding: utf-8 -*-
"""
JSON response schemas declared to Gemini for each text stage.

Kept as plain dicts (OpenAPI subset understood by google-genai) so the
contract with the provider is visible in one place and can be checked
against the pydantic models that validate the answers.
"""

_STR = {"type": "STRING"}
_INT = {"type": "INTEGER"}

_TERM_LIST = {
    "type": "ARRAY",
    "items": {
        "type": "OBJECT",
        "properties": {"original": _STR, "indianized": _STR},
        "required": ["original", "indianized"],
    },
}

LEXICON_STORY_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "lexicon": {
            "type": "OBJECT",
            "properties": {
                "cultivationStages": _TERM_LIST,
                "techniques": _TERM_LIST,
                "names": _TERM_LIST,
                "system": _TERM_LIST,
            },
            "required": ["cultivationStages", "techniques", "names", "system"],
        },
        "rewrittenStory": _STR,
    },
    "required": ["lexicon", "rewrittenStory"],
}

PLOT_OPTIONS_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "plotOptions": {"type": "ARRAY", "items": _STR},
    },
    "required": ["plotOptions"],
}

IMAGE_PROMPTS_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "character_prompts": {"type": "ARRAY", "items": _STR},
        "scene_prompts": {"type": "ARRAY", "items": _STR},
    },
    "required": ["character_prompts", "scene_prompts"],
}

VIDEO_SCRIPT_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "title": _STR,
        "script": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {"scene": _INT, "visual": _STR, "dialogue": _STR},
                "required": ["scene", "visual", "dialogue"],
            },
        },
        "veoPrompts": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {"scene": _INT, "prompt": _STR},
                "required": ["scene", "prompt"],
            },
        },
    },
    "required": ["title", "script", "veoPrompts"],
}
