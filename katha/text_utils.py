import re, unicodedata
from typing import List

from katha.data_models import Lexicon, VideoScript


def _fold(s: str) -> str:
    s = ''.join(c for c in unicodedata.normalize('NFD', s) if unicodedata.category(c) != 'Mn')
    return s.lower().strip()


def _safe_name(s: str) -> str:
    s = re.sub(r"[^\w\- ]+", "", s, flags=re.U)
    return s.strip().replace(" ", "_")[:60]


def localized_terms_in_story(story: str, lexicon: Lexicon) -> List[str]:
    """Localized lexicon terms that actually appear in the story (diacritics-insensitive)."""
    folded = _fold(story or "")
    found = []
    for _, entries in lexicon.categories():
        for e in entries:
            term = (e.indianized or "").strip()
            if term and _fold(term) in folded and term not in found:
                found.append(term)
    return found


def lexicon_to_markdown(lexicon: Lexicon) -> str:
    lines = ["# Lexicon", ""]
    for label, entries in lexicon.categories():
        lines.append(f"## {label}")
        if not entries:
            lines.append("_(none)_")
        for e in entries:
            lines.append(f"- **{e.original}** → {e.indianized}")
        lines.append("")
    return "\n".join(lines).strip() + "\n"


def video_script_to_markdown(script: VideoScript) -> str:
    lines = [f"# {script.title}", "", "| Scene | Visual | Dialogue / Narration |", "|---|---|---|"]
    for s in script.script:
        visual = s.visual.replace("|", r"\|").replace("\n", " ")
        dialogue = s.dialogue.replace("|", r"\|").replace("\n", " ")
        lines.append(f"| {s.scene} | {visual} | {dialogue} |")
    return "\n".join(lines) + "\n"


def veo_prompts_text(script: VideoScript) -> str:
    return "\n\n".join(f"# Scene {v.scene}\n{v.prompt}" for v in script.veo_prompts) + "\n"
