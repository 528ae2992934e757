import os
import hashlib
import logging
from typing import Tuple

import streamlit as st
from dotenv import load_dotenv, set_key, find_dotenv
from google import genai

from katha.errors import KathaError, MissingCredentialError

logger = logging.getLogger(__name__)

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# checked in this order; GEMINI_API_KEY is the one written to .env
KEY_VARIABLES = ("GEMINI_API_KEY", "GOOGLE_API_KEY")


def configure_logging():
    """Root logging once per process; provider HTTP chatter kept at WARNING."""
    level = os.getenv("KATHA_LOG_LEVEL", "INFO").upper()
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=level, format=_LOG_FORMAT)
    else:
        root.setLevel(level)
    for noisy in ("httpx", "httpcore", "google_genai", "urllib3"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


def load_env() -> str:
    """The active API key, or "" when none is configured.

    A key applied from the sidebar lives in os.environ and wins over .env.
    """
    load_dotenv(override=False)
    for var in KEY_VARIABLES:
        key = os.getenv(var, "")
        if key:
            return key
    return ""


def key_fingerprint(key: str) -> str:
    # stable across processes, never reveals the key
    digest = hashlib.sha256(key.encode("utf-8")).hexdigest()[:8]
    return f"{len(key)} chars, sha256 {digest}"


def credential_status() -> Tuple[bool, str]:
    key = load_env()
    if not key:
        return False, MissingCredentialError(KEY_VARIABLES).message
    return True, f"Gemini key loaded ({key_fingerprint(key)})."


def _persist_key(key: str) -> str:
    env_path = find_dotenv(usecwd=True) or os.path.join(os.getcwd(), ".env")
    try:
        if not os.path.exists(env_path):
            open(env_path, "a", encoding="utf-8").close()
        set_key(env_path, KEY_VARIABLES[0], key)
    except OSError as e:
        logger.error("Could not write %s: %s", env_path, e)
        raise KathaError(f"Could not save the key to {env_path}.", {"path": env_path}) from e
    return env_path


def apply_api_key(new_key: str, persist: bool = False) -> str:
    """
    Make new_key the active key for this process and return its fingerprint.

    With persist=True the key is also stored in .env (created in cwd if
    missing) so the next launch picks it up. init_client is cached per key, so
    the next run builds a fresh client without clearing any cache.
    """
    key = (new_key or "").strip()
    if not key or any(c.isspace() for c in key):
        raise KathaError("The API key is empty or contains whitespace.")
    if persist:
        path = _persist_key(key)
        logger.info("Saved API key to %s", path)
    for var in KEY_VARIABLES:
        os.environ[var] = key
    return key_fingerprint(key)


def forget_api_key():
    """Drop the in-process key; a key in .env is picked up again on the next run."""
    for var in KEY_VARIABLES:
        os.environ.pop(var, None)


@st.cache_resource(show_spinner=False)
def init_client(api_key: str):
    if not api_key:
        raise MissingCredentialError(KEY_VARIABLES)
    logger.info("Initializing Gemini client (%s)", key_fingerprint(api_key))
    return genai.Client(api_key=api_key)
