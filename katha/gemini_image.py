# katha/gemini_image.py
# -*- coding: utf-8 -*-
import base64
import io
import logging
from typing import Optional, Tuple

import httpx
from PIL import Image
from google.genai import errors as genai_errors
from google.genai import types

from katha.errors import ProviderError
from katha.presets import IMAGE_ASPECT_RATIO, IMAGE_MIME_TYPE

logger = logging.getLogger(__name__)

STAGE = "image"


def to_data_uri(data: bytes, mime_type: str = IMAGE_MIME_TYPE) -> str:
    return f"data:{mime_type};base64,{base64.b64encode(data).decode('ascii')}"


def decode_data_uri(uri: str) -> Tuple[str, bytes]:
    """'data:image/jpeg;base64,...' -> ('image/jpeg', raw bytes)."""
    if not uri or not uri.startswith("data:") or ";base64," not in uri:
        raise ValueError("Not a base64 data URI")
    header, payload = uri.split(",", 1)
    mime_type = header[len("data:"):].split(";", 1)[0] or "application/octet-stream"
    return mime_type, base64.b64decode(payload)


def data_uri_to_image(uri: str) -> Image.Image:
    _, raw = decode_data_uri(uri)
    return Image.open(io.BytesIO(raw))


def _first_image_from_parts(parts) -> Optional[Tuple[bytes, str]]:
    """First inline_data image from response.candidates[0].content.parts."""
    if not parts:
        return None
    for p in parts:
        inline = getattr(p, "inline_data", None)
        if inline and getattr(inline, "data", None):
            return inline.data, (getattr(inline, "mime_type", None) or "image/png")
    return None


def is_imagen_model(model_name: str) -> bool:
    return (model_name or "").startswith("imagen")


async def _imagen_generate(client, prompt: str, model_name: str, aspect_ratio: str) -> Tuple[bytes, str]:
    resp = await client.aio.models.generate_images(
        model=model_name,
        prompt=prompt,
        config=types.GenerateImagesConfig(
            number_of_images=1,
            output_mime_type=IMAGE_MIME_TYPE,
            aspect_ratio=aspect_ratio,
        ),
    )
    generated = getattr(resp, "generated_images", None) or []
    if not generated or generated[0].image is None or not generated[0].image.image_bytes:
        raise ProviderError(STAGE, "No image returned (the prompt may have been filtered).", {"model": model_name})
    img = generated[0].image
    return img.image_bytes, (img.mime_type or IMAGE_MIME_TYPE)


async def _gemini_image_generate(client, prompt: str, model_name: str, aspect_ratio: str) -> Tuple[bytes, str]:
    # Gemini image models take the framing as natural language
    full_prompt = f"Generate an image with aspect ratio {aspect_ratio}. {prompt}".strip()
    resp = await client.aio.models.generate_content(model=model_name, contents=[full_prompt])
    if not resp or not resp.candidates:
        raise ProviderError(STAGE, "No candidates from model.", {"model": model_name})
    # content is None when the candidate was blocked (finish_reason IMAGE_SAFETY)
    content = resp.candidates[0].content
    found = _first_image_from_parts(content.parts if content else None)
    if found is None:
        raise ProviderError(
            STAGE,
            f"No image data in response. Check that '{model_name}' is an image model "
            "and your API key has image-generation access.",
            {"model": model_name},
        )
    return found


async def synthesize_image(
    client,
    prompt: str,
    model_name: str,
    aspect_ratio: str = IMAGE_ASPECT_RATIO,
) -> str:
    """
    One image for one prompt, returned as a data URI.
    Imagen models use generate_images; Gemini image models (Nano Banana)
    answer through generate_content with inline image parts.
    """
    logger.debug("Image request to %s (%d chars)", model_name, len(prompt))
    try:
        if is_imagen_model(model_name):
            data, mime_type = await _imagen_generate(client, prompt, model_name, aspect_ratio)
        else:
            data, mime_type = await _gemini_image_generate(client, prompt, model_name, aspect_ratio)
    except (genai_errors.APIError, httpx.HTTPError) as e:
        logger.warning("Image request to %s failed: %s", model_name, e)
        raise ProviderError(STAGE, f"Image request failed: {e}", {"model": model_name}) from e
    return to_data_uri(data, mime_type)
