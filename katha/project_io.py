# -*- coding: utf-8 -*-
import io
import json
import logging
import os
import zipfile
from pathlib import Path
from typing import Any, Dict, List

from katha.gemini_image import decode_data_uri
from katha.session import KathaSession
from katha.text_utils import _safe_name, lexicon_to_markdown, video_script_to_markdown, veo_prompts_text

logger = logging.getLogger(__name__)

APP_DIR = Path(__file__).resolve().parents[1]
DATA_DIR = Path(os.getenv("KATHA_DATA_DIR") or (APP_DIR / "sessions"))
DATA_DIR.mkdir(parents=True, exist_ok=True)

_EXT = {"image/jpeg": "jpg", "image/png": "png", "image/webp": "webp"}


def _migrate_session_dict(data: Dict[str, Any]) -> Dict[str, Any]:
    data = dict(data or {})
    data.setdefault("name", "Katha")
    data.setdefault("seed_story", "")
    data.setdefault("plot_options", [])
    data.setdefault("selected_plot", "")
    data.setdefault("rewritten_story", data.pop("rewrittenStory", ""))
    if "plotOptions" in data and not data["plot_options"]:
        data["plot_options"] = data.pop("plotOptions")
    if "videoScript" in data and not data.get("video_script"):
        data["video_script"] = data.pop("videoScript")
    if data.get("selected_plot") and data["selected_plot"] not in data["plot_options"]:
        data["selected_plot"] = ""
    return data


def session_path(name: str, data_dir: Path = DATA_DIR) -> Path:
    return Path(data_dir) / f"{_safe_name(name) or 'session'}.json"


def save_session(session: KathaSession, data_dir: Path = DATA_DIR) -> Path:
    f = session_path(session.name, data_dir)
    with f.open("w", encoding="utf-8") as fp:
        json.dump(session.model_dump(mode="json"), fp, ensure_ascii=False, indent=2)
    logger.info("Saved session '%s' to %s", session.name, f)
    return f


def load_session(path: Path, data_dir: Path = DATA_DIR) -> KathaSession:
    p = Path(path)
    if not p.is_absolute():
        p = Path(data_dir) / p
    with p.open("r", encoding="utf-8") as fp:
        raw = json.load(fp)
    session = KathaSession.model_validate(_migrate_session_dict(raw))
    logger.info("Loaded session '%s' from %s (stage=%s)", session.name, p, session.stage.name)
    return session


def list_sessions(data_dir: Path = DATA_DIR) -> List[Path]:
    return sorted(Path(data_dir).glob("*.json"))


def clear_session(name: str, data_dir: Path = DATA_DIR) -> bool:
    """Delete the saved file for this session name. True if a file was removed."""
    f = session_path(name, data_dir)
    if not f.exists():
        return False
    f.unlink()
    logger.info("Cleared saved session %s", f)
    return True


def export_zip(session: KathaSession) -> bytes:
    mem = io.BytesIO()
    with zipfile.ZipFile(mem, "w", zipfile.ZIP_DEFLATED) as z:
        z.writestr("session.json", json.dumps(session.model_dump(mode="json"), ensure_ascii=False, indent=2))
        z.writestr("seed_story.md", session.seed_story or "")

        if session.lexicon is not None:
            z.writestr("lexicon.md", lexicon_to_markdown(session.lexicon))
        if session.rewritten_story:
            z.writestr("story.md", session.rewritten_story)
        if session.plot_options:
            lines = [f"{i}. {p}" for i, p in enumerate(session.plot_options, 1)]
            if session.selected_plot:
                lines += ["", f"Selected: {session.selected_plot}"]
            z.writestr("plot_options.md", "\n".join(lines) + "\n")

        if session.video_script is not None:
            z.writestr("video_script.md", video_script_to_markdown(session.video_script))
            z.writestr("veo_prompts.txt", veo_prompts_text(session.video_script))

        imgs = session.images
        if imgs is not None:
            groups = [
                ("character", imgs.character_images, imgs.character_prompts),
                ("scene", imgs.scene_images, imgs.scene_prompts),
            ]
            prompt_lines = []
            for kind, uris, prompts in groups:
                for i, (uri, prompt) in enumerate(zip(uris, prompts), 1):
                    mime_type, raw = decode_data_uri(uri)
                    fname = f"images/{kind}_{i:02d}.{_EXT.get(mime_type, 'bin')}"
                    z.writestr(fname, raw)
                    prompt_lines.append(f"{fname}\n{prompt}\n")
            z.writestr("images/prompts.txt", "\n".join(prompt_lines))

    mem.seek(0)
    return mem.read()
