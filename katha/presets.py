# -*- coding: utf-8 -*-
"""
Centralized preset registry for Katha-Yantra.
Filter presets, difficulty guidance and image style constants that get
injected into the prompt builders.
"""
import os

from katha.data_models import Difficulty

DEFAULT_TEXT_MODEL = os.getenv("KATHA_TEXT_MODEL", "gemini-2.5-flash")
DEFAULT_IMAGE_MODEL = os.getenv("KATHA_IMAGE_MODEL", "imagen-4.0-generate-001")

TEXT_MODELS = ["gemini-2.5-flash", "gemini-2.5-pro"]
IMAGE_MODELS = ["imagen-4.0-generate-001", "imagen-4.0-fast-generate-001", "gemini-2.5-flash-image"]

IMAGE_ASPECT_RATIO = "3:4"
IMAGE_MIME_TYPE = "image/jpeg"
IMAGE_STYLE_SUFFIX = "detailed, culturally appropriate attire, vedic mythology aesthetic, digital painting"

CHARACTER_PROMPT_COUNT = 1
SCENE_PROMPT_COUNT = 3
PLOT_OPTION_COUNT = 10

CLOTHING_COLORS = ["Red", "Blue", "Green", "Yellow", "Black", "White"]

DEFAULT_FILTER_PROMPT = (
    "Transform this story into an Indian mythological setting. Replace cultivation "
    "realms with stages of yogic and tapasya attainment, martial techniques with "
    "astras, mantras and siddhis, character and place names with Sanskrit or regional "
    "Indian names, and game-like system elements (EXP, quests, levels) with karma, "
    "dharma-bound vows and divine boons. Keep the core plot intact."
)

FILTER_PRESETS = {
    "Vedic (default)": DEFAULT_FILTER_PROMPT,
    "Puranic Epic": (
        "Recast the story as a Puranic epic: devas, asuras and rishis, celestial weapons, "
        "curses and boons, with grand lineages and sacred geography (Kailash, Kurukshetra, "
        "the Himalayas). Cultivation becomes tapasya, techniques become astras."
    ),
    "Folk Tale": (
        "Retell the story as an Indian village folk tale: simple names, local deities, "
        "wandering sadhus and clever tricksters. Game systems become a storyteller's "
        "riddles and the blessings of the village goddess."
    ),
    "Temple Town": (
        "Set the story in a South Indian temple town of the Chola era: guilds of bronze "
        "casters, temple dancers, Siddha alchemists and kalaripayattu masters. Use Tamil "
        "and Sanskrit terms for ranks, techniques and places."
    ),
}

DIFFICULTY_TIERS = {
    Difficulty.EASY: {
        "lexicon": "Use common, easily understandable Indianized terms.",
        "story": "The story should be straightforward and direct.",
        "plots": "The plots should be simple, with clear goals and resolutions.",
    },
    Difficulty.MEDIUM: {
        "lexicon": "Use a balanced mix of common and interesting terms.",
        "story": "The story should have a good narrative flow and moderate complexity.",
        "plots": "The plots should have some twists and moderate complexity.",
    },
    Difficulty.HARD: {
        "lexicon": (
            "Use more obscure, complex, and nuanced terms from deep Vedic/Puranic lore. "
            "The lexicon should be more extensive."
        ),
        "story": (
            "The story should employ more sophisticated language, complex sentences, "
            "and deeper mythological allusions."
        ),
        "plots": (
            "The plots should be intricate, involving moral ambiguity, complex character "
            "motivations, and unexpected consequences."
        ),
    },
}


def difficulty_block(tier, task: str) -> str:
    """Guidance line for one task ('lexicon', 'story', 'plots') at the given tier."""
    try:
        tier = Difficulty(tier)
    except ValueError:
        raise ValueError(f"Unknown difficulty tier: {tier!r}") from None
    guidance = DIFFICULTY_TIERS[tier]
    if task not in guidance:
        raise ValueError(f"Unknown task for difficulty guidance: {task!r}")
    return f"For '{tier.value}' difficulty: {guidance[task]}"
