import re, json
import logging
from typing import Any, Dict, Type, TypeVar

import httpx
from google.genai import errors as genai_errors
from google.genai import types
from pydantic import BaseModel, ValidationError

from katha.errors import ProviderError, SchemaMismatchError

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)

_FENCE = re.compile(r"```(?:json)?\s*(\{.*?\}|\[.*?\])\s*```", flags=re.S | re.I)


def parse_json_text(text: str, stage: str) -> Any:
    """JSON from the model's text; a ```json fenced block is accepted too."""
    txt = (text or "").strip()
    if not txt:
        raise SchemaMismatchError(stage, "Model returned an empty response.")
    try:
        return json.loads(txt)
    except json.JSONDecodeError:
        pass
    m = _FENCE.search(txt)
    if m:
        try:
            return json.loads(m.group(1))
        except json.JSONDecodeError:
            pass
    raise SchemaMismatchError(stage, "Model response is not valid JSON.", {"raw": txt[:500]})


async def gemini_json(client, prompt: str, schema: Dict[str, Any], model: str, stage: str) -> Any:
    if client is None:
        raise RuntimeError("Gemini client is not initialized")
    config = types.GenerateContentConfig(
        response_mime_type="application/json",
        response_schema=schema,
    )
    try:
        resp = await client.aio.models.generate_content(model=model, contents=prompt, config=config)
    except (genai_errors.APIError, httpx.HTTPError) as e:
        logger.warning("Stage %s: provider error from %s: %s", stage, model, e)
        raise ProviderError(stage, f"Provider request failed: {e}", {"model": model}) from e
    return parse_json_text(resp.text, stage)


def validate_response(model_cls: Type[M], data: Any, stage: str) -> M:
    try:
        return model_cls.model_validate(data)
    except ValidationError as e:
        logger.warning("Stage %s: response does not match %s: %s", stage, model_cls.__name__, e)
        raise SchemaMismatchError(
            stage,
            f"Model response does not match the expected {model_cls.__name__} shape.",
            {"errors": e.errors(include_url=False)},
        ) from e
