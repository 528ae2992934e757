# -*- coding: utf-8 -*-
"""
The Katha-Yantra stage operations.

Each stage is a single async call (or, for images, one prompt call followed
by a concurrent fan-out of image calls) against the Gemini client. A stage
either returns its complete output or raises a StageError; nothing partial
is ever returned and nothing is retried.
"""
import asyncio
import logging
import threading
from typing import List

from katha.data_models import (
    Difficulty,
    GeneratedImages,
    GeneratedText,
    ImagePrompts,
    PlotOptions,
    VideoScript,
)
from katha.errors import SchemaMismatchError
from katha.gemini_helpers import gemini_json, validate_response
from katha.gemini_image import synthesize_image
from katha.presets import (
    CHARACTER_PROMPT_COUNT,
    DEFAULT_IMAGE_MODEL,
    DEFAULT_TEXT_MODEL,
    IMAGE_ASPECT_RATIO,
    SCENE_PROMPT_COUNT,
)
from katha.prompt_builders import (
    build_image_prompts_prompt,
    build_lexicon_story_prompt,
    build_plot_options_prompt,
    build_video_script_prompt,
    compose_image_prompt,
)
from katha.schemas import (
    IMAGE_PROMPTS_SCHEMA,
    LEXICON_STORY_SCHEMA,
    PLOT_OPTIONS_SCHEMA,
    VIDEO_SCRIPT_SCHEMA,
)

logger = logging.getLogger(__name__)


_loop = None
_loop_lock = threading.Lock()


def _stage_loop():
    global _loop
    with _loop_lock:
        if _loop is None or _loop.is_closed():
            _loop = asyncio.new_event_loop()
            threading.Thread(target=_loop.run_forever, name="katha-stages", daemon=True).start()
    return _loop


def run_sync(coro):
    """
    Run a stage coroutine from Streamlit's (loop-less) script thread.

    Every call lands on the same background loop: the cached client keeps an
    async connection pool that is bound to the loop it was first used on.
    """
    return asyncio.run_coroutine_threadsafe(coro, _stage_loop()).result()


async def generate_story_and_lexicon(
    client,
    seed_story: str,
    filter_prompt: str,
    difficulty: Difficulty,
    model: str = DEFAULT_TEXT_MODEL,
) -> GeneratedText:
    if not seed_story or not seed_story.strip():
        raise ValueError("Seed story must not be empty")
    difficulty = Difficulty(difficulty)
    logger.info("Generating lexicon and story (difficulty=%s, model=%s)", difficulty.value, model)
    prompt = build_lexicon_story_prompt(seed_story.strip(), filter_prompt or "", difficulty)
    data = await gemini_json(client, prompt, LEXICON_STORY_SCHEMA, model, stage="lexicon")
    result = validate_response(GeneratedText, data, stage="lexicon")
    logger.info(
        "Lexicon ready: %s",
        ", ".join(f"{label}={len(entries)}" for label, entries in result.lexicon.categories()),
    )
    return result


async def generate_plot_options(
    client,
    rewritten_story: str,
    difficulty: Difficulty,
    model: str = DEFAULT_TEXT_MODEL,
) -> List[str]:
    difficulty = Difficulty(difficulty)
    logger.info("Generating plot options (difficulty=%s, model=%s)", difficulty.value, model)
    prompt = build_plot_options_prompt(rewritten_story, difficulty)
    data = await gemini_json(client, prompt, PLOT_OPTIONS_SCHEMA, model, stage="plots")
    options = validate_response(PlotOptions, data, stage="plots").plot_options
    logger.info("Received %d plot options", len(options))
    return options


def _fit_prompt_counts(prompts: ImagePrompts) -> ImagePrompts:
    """Truncate extra prompts; too few is a schema mismatch."""
    chars = [p.strip() for p in prompts.character_prompts if p and p.strip()]
    scenes = [p.strip() for p in prompts.scene_prompts if p and p.strip()]
    if len(chars) < CHARACTER_PROMPT_COUNT or len(scenes) < SCENE_PROMPT_COUNT:
        raise SchemaMismatchError(
            "images",
            f"Expected {CHARACTER_PROMPT_COUNT} character and {SCENE_PROMPT_COUNT} scene prompts, "
            f"got {len(chars)} and {len(scenes)}.",
            {"character_prompts": len(chars), "scene_prompts": len(scenes)},
        )
    if len(chars) > CHARACTER_PROMPT_COUNT or len(scenes) > SCENE_PROMPT_COUNT:
        logger.info("Truncating image prompts from %d/%d", len(chars), len(scenes))
    return ImagePrompts(
        character_prompts=chars[:CHARACTER_PROMPT_COUNT],
        scene_prompts=scenes[:SCENE_PROMPT_COUNT],
    )


async def generate_images(
    client,
    rewritten_story: str,
    text_model: str = DEFAULT_TEXT_MODEL,
    image_model: str = DEFAULT_IMAGE_MODEL,
    aspect_ratio: str = IMAGE_ASPECT_RATIO,
) -> GeneratedImages:
    """
    Prompt synthesis, then one image request per prompt issued together.
    If any image request fails the whole batch fails.
    """
    logger.info("Generating image prompts (model=%s)", text_model)
    data = await gemini_json(
        client, build_image_prompts_prompt(rewritten_story), IMAGE_PROMPTS_SCHEMA, text_model, stage="images"
    )
    prompts = _fit_prompt_counts(validate_response(ImagePrompts, data, stage="images"))

    all_prompts = prompts.character_prompts + prompts.scene_prompts
    logger.info("Requesting %d images from %s", len(all_prompts), image_model)
    images = await asyncio.gather(*[
        synthesize_image(client, compose_image_prompt(p), image_model, aspect_ratio)
        for p in all_prompts
    ])

    n_char = len(prompts.character_prompts)
    return GeneratedImages(
        character_images=list(images[:n_char]),
        scene_images=list(images[n_char:]),
        character_prompts=prompts.character_prompts,
        scene_prompts=prompts.scene_prompts,
    )


async def regenerate_character_image(
    client,
    original_prompt: str,
    customization: str,
    model: str = DEFAULT_IMAGE_MODEL,
    aspect_ratio: str = IMAGE_ASPECT_RATIO,
) -> str:
    logger.info("Regenerating character image (model=%s)", model)
    return await synthesize_image(client, compose_image_prompt(original_prompt, customization), model, aspect_ratio)


async def generate_video_script(
    client,
    selected_plot: str,
    story_context: str,
    model: str = DEFAULT_TEXT_MODEL,
) -> VideoScript:
    logger.info("Generating video script (model=%s)", model)
    prompt = build_video_script_prompt(selected_plot, story_context)
    data = await gemini_json(client, prompt, VIDEO_SCRIPT_SCHEMA, model, stage="video_script")
    script = validate_response(VideoScript, data, stage="video_script")
    logger.info("Video script '%s' with %d scenes", script.title, len(script.script))
    return script
