from enum import Enum
from typing import List, Iterator, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class Difficulty(str, Enum):
    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"


class _WireModel(BaseModel):
    # provider JSON uses camelCase aliases; python code uses field names
    model_config = ConfigDict(populate_by_name=True)


class LexiconEntry(_WireModel):
    original: str
    indianized: str


class Lexicon(_WireModel):
    cultivation_stages: List[LexiconEntry] = Field(default_factory=list, alias="cultivationStages")
    techniques: List[LexiconEntry] = Field(default_factory=list)
    names: List[LexiconEntry] = Field(default_factory=list)
    system: List[LexiconEntry] = Field(default_factory=list)

    def categories(self) -> Iterator[Tuple[str, List[LexiconEntry]]]:
        """(label, entries) for the four categories, in declaration order."""
        labels = {
            "cultivation_stages": "Cultivation Stages",
            "techniques": "Techniques",
            "names": "Names",
            "system": "System",
        }
        for field, label in labels.items():
            yield label, getattr(self, field)


class GeneratedText(_WireModel):
    lexicon: Lexicon
    rewritten_story: str = Field(alias="rewrittenStory")

    @field_validator("rewritten_story")
    @classmethod
    def _story_not_blank(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("rewrittenStory is empty")
        return v.strip()


class PlotOptions(_WireModel):
    plot_options: List[str] = Field(alias="plotOptions")

    @field_validator("plot_options")
    @classmethod
    def _drop_blank(cls, v: List[str]) -> List[str]:
        kept = [p.strip() for p in v if p and p.strip()]
        if not kept:
            raise ValueError("no non-empty plot options")
        return kept


class ImagePrompts(_WireModel):
    character_prompts: List[str]
    scene_prompts: List[str]


class GeneratedImages(_WireModel):
    character_images: List[str] = Field(alias="characterImages")
    scene_images: List[str] = Field(alias="sceneImages")
    character_prompts: List[str] = Field(alias="characterPrompts")
    scene_prompts: List[str] = Field(alias="scenePrompts")

    @model_validator(mode="after")
    def _counts_match(self):
        if len(self.character_images) != len(self.character_prompts):
            raise ValueError("character image count does not match character prompt count")
        if len(self.scene_images) != len(self.scene_prompts):
            raise ValueError("scene image count does not match scene prompt count")
        return self


class ScriptScene(_WireModel):
    scene: int
    visual: str
    dialogue: str = ""


class VeoPrompt(_WireModel):
    scene: int
    prompt: str


class VideoScript(_WireModel):
    title: str
    script: List[ScriptScene]
    veo_prompts: List[VeoPrompt] = Field(alias="veoPrompts")

    @model_validator(mode="after")
    def _scenes_correspond(self):
        script_nums = [s.scene for s in self.script]
        veo_nums = [v.scene for v in self.veo_prompts]
        if script_nums != veo_nums:
            raise ValueError(
                f"script scenes {script_nums} do not match veo prompt scenes {veo_nums}"
            )
        return self
