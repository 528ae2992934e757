from enum import IntEnum
from typing import List, Optional

from pydantic import BaseModel, Field

from katha.data_models import Difficulty, GeneratedImages, GeneratedText, Lexicon, VideoScript
from katha.errors import StageOrderError
from katha.presets import DEFAULT_FILTER_PROMPT


class Stage(IntEnum):
    SEED = 0
    STORY = 1
    PLOTS = 2
    SELECTED = 3
    MEDIA = 4


class KathaSession(BaseModel):
    """
    Everything the UI holds between stages. Applying a stage's output
    clears every later stage, so the progression only moves forward from
    the point that was regenerated.
    """
    name: str = "Katha"
    seed_story: str = ""
    filter_prompt: str = DEFAULT_FILTER_PROMPT
    difficulty: Difficulty = Difficulty.MEDIUM
    lexicon: Optional[Lexicon] = None
    rewritten_story: str = ""
    plot_options: List[str] = Field(default_factory=list)
    selected_plot: str = ""
    images: Optional[GeneratedImages] = None
    video_script: Optional[VideoScript] = None
    character_customization: str = ""

    @property
    def stage(self) -> Stage:
        if self.images is not None or self.video_script is not None:
            return Stage.MEDIA
        if self.selected_plot:
            return Stage.SELECTED
        if self.plot_options:
            return Stage.PLOTS
        if self.lexicon is not None and self.rewritten_story:
            return Stage.STORY
        return Stage.SEED

    def _require(self, needed: Stage, action: str):
        if self.stage < needed:
            raise StageOrderError(
                f"Cannot {action} before the {needed.name.lower()} stage.",
                {"current": self.stage.name, "needed": needed.name},
            )

    def _clear_after_story(self):
        self.plot_options = []
        self._clear_after_plots()

    def _clear_after_plots(self):
        self.selected_plot = ""
        self.images = None
        self.video_script = None

    def apply_story(self, generated: GeneratedText):
        self.lexicon = generated.lexicon
        self.rewritten_story = generated.rewritten_story
        self._clear_after_story()

    def apply_plot_options(self, options: List[str]):
        self._require(Stage.STORY, "apply plot options")
        self.plot_options = list(options)
        self._clear_after_plots()

    def select_plot(self, option: str):
        self._require(Stage.PLOTS, "select a plot")
        if option not in self.plot_options:
            raise ValueError("Selected plot is not one of the current plot options")
        if option != self.selected_plot:
            self.video_script = None
        self.selected_plot = option

    def apply_images(self, images: GeneratedImages):
        self._require(Stage.SELECTED, "apply images")
        self.images = images

    def replace_character_image(self, index: int, image_uri: str):
        if self.images is None:
            raise StageOrderError("No images have been generated yet.")
        if not 0 <= index < len(self.images.character_images):
            raise IndexError(f"No character image at index {index}")
        self.images.character_images[index] = image_uri

    def apply_video_script(self, script: VideoScript):
        self._require(Stage.SELECTED, "apply a video script")
        self.video_script = script

    def reset(self):
        """Back to the first stage; the session name is kept."""
        name = self.name
        fresh = KathaSession(name=name)
        for field in type(self).model_fields:
            setattr(self, field, getattr(fresh, field))
