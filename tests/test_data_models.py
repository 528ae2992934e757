"""Tests for the provider data contracts and their declared JSON schemas."""

import pytest
from pydantic import ValidationError

from katha.data_models import (
    Difficulty,
    GeneratedImages,
    GeneratedText,
    ImagePrompts,
    Lexicon,
    LexiconEntry,
    PlotOptions,
    ScriptScene,
    VeoPrompt,
    VideoScript,
)
from katha.schemas import (
    IMAGE_PROMPTS_SCHEMA,
    LEXICON_STORY_SCHEMA,
    PLOT_OPTIONS_SCHEMA,
    VIDEO_SCRIPT_SCHEMA,
)
from conftest import LEXICON_STORY, VIDEO_SCRIPT


def _wire_names(model_cls):
    return {field.alias or name for name, field in model_cls.model_fields.items()}


class TestSchemasMatchModels:
    """The schema sent to the provider and the model that validates the answer agree."""

    def test_lexicon_story_schema(self):
        assert set(LEXICON_STORY_SCHEMA["properties"]) == _wire_names(GeneratedText)
        lexicon_props = LEXICON_STORY_SCHEMA["properties"]["lexicon"]["properties"]
        assert set(lexicon_props) == _wire_names(Lexicon)
        for category in lexicon_props.values():
            assert category["type"] == "ARRAY"
            assert set(category["items"]["properties"]) == _wire_names(LexiconEntry)

    def test_plot_options_schema(self):
        assert set(PLOT_OPTIONS_SCHEMA["properties"]) == _wire_names(PlotOptions)

    def test_image_prompts_schema(self):
        assert set(IMAGE_PROMPTS_SCHEMA["properties"]) == _wire_names(ImagePrompts)

    def test_video_script_schema(self):
        props = VIDEO_SCRIPT_SCHEMA["properties"]
        assert set(props) == _wire_names(VideoScript)
        assert set(props["script"]["items"]["properties"]) == _wire_names(ScriptScene)
        assert set(props["veoPrompts"]["items"]["properties"]) == _wire_names(VeoPrompt)
        assert props["script"]["items"]["properties"]["scene"]["type"] == "INTEGER"

    def test_required_keys_are_declared_properties(self):
        for schema in (LEXICON_STORY_SCHEMA, PLOT_OPTIONS_SCHEMA, IMAGE_PROMPTS_SCHEMA, VIDEO_SCRIPT_SCHEMA):
            assert set(schema["required"]) <= set(schema["properties"])


class TestLexicon:
    def test_parses_wire_names(self):
        generated = GeneratedText.model_validate(LEXICON_STORY)
        assert generated.lexicon.cultivation_stages[0].indianized == "Prana Dharana"
        assert len(generated.lexicon.names) == 3
        assert generated.rewritten_story.startswith("In the depths")

    def test_exactly_four_categories(self):
        labels = [label for label, _ in Lexicon().categories()]
        assert labels == ["Cultivation Stages", "Techniques", "Names", "System"]

    def test_missing_category_is_empty_list(self):
        lexicon = Lexicon.model_validate({"names": [{"original": "a", "indianized": "b"}]})
        assert lexicon.techniques == []
        assert lexicon.system == []

    def test_blank_story_rejected(self):
        with pytest.raises(ValidationError):
            GeneratedText.model_validate({"lexicon": {}, "rewrittenStory": "   "})

    def test_entry_requires_both_terms(self):
        with pytest.raises(ValidationError):
            LexiconEntry.model_validate({"original": "Quest"})


class TestPlotOptions:
    def test_blank_entries_dropped(self):
        opts = PlotOptions.model_validate({"plotOptions": ["  One. ", "", "   ", "Two."]})
        assert opts.plot_options == ["One.", "Two."]

    def test_all_blank_rejected(self):
        with pytest.raises(ValidationError):
            PlotOptions.model_validate({"plotOptions": ["", " "]})


class TestGeneratedImages:
    def test_counts_must_match(self):
        with pytest.raises(ValidationError):
            GeneratedImages(
                character_images=["data:image/jpeg;base64,AA=="],
                scene_images=[],
                character_prompts=["hero"],
                scene_prompts=["a", "b", "c"],
            )

    def test_accepts_matching_counts(self):
        imgs = GeneratedImages(
            character_images=["c"], scene_images=["s1", "s2", "s3"],
            character_prompts=["hero"], scene_prompts=["a", "b", "c"],
        )
        assert len(imgs.scene_images) == len(imgs.scene_prompts) == 3


class TestVideoScript:
    def test_parses_veo_prompts_alias(self):
        vs = VideoScript.model_validate(VIDEO_SCRIPT)
        assert [s.scene for s in vs.script] == [v.scene for v in vs.veo_prompts] == [1, 2]

    def test_scene_sequence_mismatch_rejected(self):
        data = dict(VIDEO_SCRIPT, veoPrompts=[{"scene": 2, "prompt": "x"}, {"scene": 1, "prompt": "y"}])
        with pytest.raises(ValidationError):
            VideoScript.model_validate(data)

    def test_length_mismatch_rejected(self):
        data = dict(VIDEO_SCRIPT, veoPrompts=VIDEO_SCRIPT["veoPrompts"][:1])
        with pytest.raises(ValidationError):
            VideoScript.model_validate(data)


def test_difficulty_values():
    assert [d.value for d in Difficulty] == ["Easy", "Medium", "Hard"]
    assert Difficulty("Hard") is Difficulty.HARD
