# -*- coding: utf-8 -*-
from katha.data_models import Difficulty
from katha.presets import (
    IMAGE_STYLE_SUFFIX,
    PLOT_OPTION_COUNT,
    CHARACTER_PROMPT_COUNT,
    SCENE_PROMPT_COUNT,
    difficulty_block,
)


def build_lexicon_story_prompt(seed_story: str, filter_prompt: str, difficulty: Difficulty) -> str:
    """
    Lexicon (4 categories) + the seed story rewritten with those terms.
    Difficulty only changes the wording of the instructions.
    """
    tier = Difficulty(difficulty).value
    return f"""
Difficulty Level: "{tier}"
User's Seed Story: "{seed_story}"
Indianization Filter: "{filter_prompt}"

Based on the seed story, filter, and difficulty level, perform the following tasks and return the output as a single JSON object.
1.  Create a detailed lexicon mapping original concepts to their Indianized versions. The lexicon should have four categories: 'cultivationStages', 'techniques', 'names' (for characters, locations, items), and 'system' (for game-like elements like EXP, Quests).
    - {difficulty_block(tier, "lexicon")}
2.  Rewrite the entire seed story using ONLY the Indianized terms from the lexicon you just created. Ensure the tone and style reflect Vedic mythology.
    - {difficulty_block(tier, "story")}

Return JSON: {{"lexicon": {{"cultivationStages": [{{"original": "...", "indianized": "..."}}], "techniques": [...], "names": [...], "system": [...]}}, "rewrittenStory": "..."}}
""".strip()


def build_plot_options_prompt(rewritten_story: str, difficulty: Difficulty, count: int = PLOT_OPTION_COUNT) -> str:
    tier = Difficulty(difficulty).value
    return f"""
Difficulty Level: "{tier}"
Here is the beginning of an Indianized story:
"{rewritten_story}"

Based on this story and the specified difficulty level, generate {count} distinct, Indianized plot directions for how the story could proceed.
- {difficulty_block(tier, "plots")}

Each option must be a concise, one-paragraph summary. Return JSON: {{"plotOptions": ["...", "..."]}}
""".strip()


def build_image_prompts_prompt(rewritten_story: str) -> str:
    return f"""
Based on the following story, create detailed image generation prompts.
Story: "{rewritten_story}"

Generate prompts for:
1.  One main character portrait. The prompt should be highly detailed, describing their appearance, attire in a culturally appropriate Indian mythological style, and expression.
2.  Three prompts for key scene illustrations from the story. The prompts should describe the environment, action, and characters involved, referencing the main character's appearance for consistency.

Return a JSON object with two keys: "character_prompts" (an array with {CHARACTER_PROMPT_COUNT} string) and "scene_prompts" (an array with {SCENE_PROMPT_COUNT} strings).
""".strip()


def build_video_script_prompt(selected_plot: str, story_context: str) -> str:
    return f"""
Story Context: "{story_context}"
Selected Plot Direction: "{selected_plot}"

Your task is to convert the selected plot direction into a YouTube-ready video script (approximately 3-5 minutes runtime).
The output must be a JSON object containing:
1. 'title': A catchy, Indianized title for the video.
2. 'script': An array of objects, where each object represents a scene with 'scene' number, 'visual' description, and 'dialogue' or narration.
3. 'veoPrompts': An array of objects, where each object has a 'scene' number and a 'prompt' for a video generation model like Veo, based on the visual description. The prompts should be concise and effective.
Every scene in 'script' must have exactly one entry in 'veoPrompts' with the same scene number, in the same order.
""".strip()


def compose_image_prompt(base: str, customization: str = "") -> str:
    """base [+ customization] + style suffix. Blank customization adds nothing."""
    parts = [(base or "").strip()]
    extra = (customization or "").strip()
    if extra:
        parts.append(extra)
    parts.append(IMAGE_STYLE_SUFFIX)
    return ", ".join(parts)
