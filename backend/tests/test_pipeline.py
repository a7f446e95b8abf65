"""
Scan pipeline: stage order, sentinels and read-aloud.
"""

import logging

import pytest

from gerihealth.application.pipeline.orchestrator import (
    OrchestratorConfig,
    PipelineBuilder,
    PipelineOrchestrator,
)
from gerihealth.application.pipeline.stages import StageConfig
from gerihealth.application.services.name_extraction import MedicationNameExtractor
from gerihealth.application.services.summarization import LabelSummarizer
from gerihealth.domain.entities.scan_result import PipelineStage, StageStatus
from gerihealth.domain.exceptions import (
    LabelResponseError,
    OCREngineError,
    PipelineConfigurationError,
    SpeechError,
)
from gerihealth.domain.messages import (
    FETCH_ERROR,
    GEMINI_ERROR,
    NO_LABEL_DATA,
    STATUS_DONE,
    STATUS_EXTRACTING_NAME,
    STATUS_FETCHING_LABEL,
    STATUS_RECOGNIZING,
    STATUS_SPEAKING,
    STATUS_SUMMARIZING,
)
from gerihealth.infrastructure.llm.dummy_llm import DummyLanguageModel
from gerihealth.infrastructure.llm.fallback import FallbackLanguageModel
from gerihealth.infrastructure.ocr.dummy_ocr import DummyOCRExtractor
from gerihealth.infrastructure.speech.silent_speaker import SilentSpeaker

from .conftest import FakeLabelSource, IBUPROFEN_PHARMACOLOGY, IBUPROFEN_SUMMARY


class BrokenSpeaker(SilentSpeaker):

    def speak(self, text):
        raise SpeechError("no audio device")


class BrokenOCR(DummyOCRExtractor):

    def extract(self, image, options=None):
        raise OCREngineError("Tesseract OCR failed: tesseract is not installed", engine_name="Tesseract")


class FailingLabelSource(FakeLabelSource):

    def fetch_label(self, name):
        self.requested.append(name)
        raise LabelResponseError("openFDA returned HTTP 500", status_code=500)


class GarbledModel(DummyLanguageModel):

    def generate(self, prompt, instructions=None, temperature=None):
        raise ValueError("unexpected payload shape")


def build(
    ocr_text="IBUPROFEN 200 MG TABLET",
    ocr=None,
    name_model=None,
    summary_model=None,
    label_source=None,
    speaker=None,
    config=None
) -> PipelineOrchestrator:
    name_model = name_model or DummyLanguageModel(default_response="Ibuprofen")
    summary_model = summary_model or DummyLanguageModel(default_response=IBUPROFEN_SUMMARY)
    return PipelineOrchestrator(
        text_extractor=ocr or DummyOCRExtractor(preset_text=ocr_text),
        name_extractor=MedicationNameExtractor(FallbackLanguageModel(name_model, None)),
        label_source=label_source or FakeLabelSource(),
        summarizer=LabelSummarizer(FallbackLanguageModel(None, summary_model)),
        speaker=speaker,
        config=config
    )


def test_successful_scan(label_image):
    label_source = FakeLabelSource()
    result = build(label_source=label_source).run(label_image)

    assert result.is_successful
    assert result.recognized_text == "IBUPROFEN 200 MG TABLET"
    assert result.medication_name == "Ibuprofen"
    assert result.label_text == IBUPROFEN_PHARMACOLOGY
    assert result.summary == IBUPROFEN_SUMMARY
    assert result.status == STATUS_DONE
    assert result.label.brand_name == "Advil"
    assert label_source.requested == ["Ibuprofen"]
    assert result.errors == []


def test_summary_model_receives_label_text(label_image):
    summary_model = DummyLanguageModel(default_response=IBUPROFEN_SUMMARY)
    build(summary_model=summary_model).run(label_image)

    prompt, instructions = summary_model.calls[0]
    assert prompt == IBUPROFEN_PHARMACOLOGY
    assert "elderly" in instructions


def test_name_model_failure_puts_sentinel_in_summary(label_image):
    label_source = FakeLabelSource()
    summary_model = DummyLanguageModel()
    result = build(
        name_model=DummyLanguageModel(fail=True),
        summary_model=summary_model,
        label_source=label_source
    ).run(label_image)

    assert result.medication_name == GEMINI_ERROR
    assert result.summary == GEMINI_ERROR
    assert not result.is_successful
    assert label_source.requested == []
    assert summary_model.calls == []
    assert result.stage_statuses[PipelineStage.NAME_EXTRACTION].status == StageStatus.FAILED
    assert result.stage_statuses[PipelineStage.LABEL_FETCH].status == StageStatus.SKIPPED
    assert result.stage_statuses[PipelineStage.SUMMARIZATION].status == StageStatus.SKIPPED


def test_fetch_failure_puts_sentinel_in_summary(label_image):
    summary_model = DummyLanguageModel()
    result = build(
        label_source=FakeLabelSource(text=FETCH_ERROR),
        summary_model=summary_model
    ).run(label_image)

    assert result.medication_name == "Ibuprofen"
    assert result.label_text == FETCH_ERROR
    assert result.summary == FETCH_ERROR
    assert result.label is None
    assert summary_model.calls == []
    assert not result.is_successful


def test_summary_failure_puts_sentinel_in_summary(label_image):
    result = build(summary_model=DummyLanguageModel(fail=True)).run(label_image)

    assert result.label_text == IBUPROFEN_PHARMACOLOGY
    assert result.summary == GEMINI_ERROR
    assert not result.is_successful
    assert result.stage_statuses[PipelineStage.SUMMARIZATION].status == StageStatus.FAILED


def test_label_without_summary_section(label_image, no_label_source):
    summary_model = DummyLanguageModel()
    result = build(label_source=no_label_source, summary_model=summary_model).run(label_image)

    assert result.summary == NO_LABEL_DATA
    assert summary_model.calls == []
    assert any("no summary section" in w for w in result.warnings)


def test_blank_ocr_stops_scan(label_image):
    name_model = DummyLanguageModel()
    result = build(ocr_text="   ", name_model=name_model).run(label_image)

    assert not result.is_successful
    assert result.errors[0].error_type == "NoTextFoundError"
    assert result.status == "No text found in the image."
    assert name_model.calls == []


def test_ocr_engine_failure_stops_scan(label_image):
    name_model = DummyLanguageModel()
    result = build(ocr=BrokenOCR(), name_model=name_model).run(label_image)

    assert not result.is_successful
    assert result.status != STATUS_DONE
    assert result.status == "Tesseract OCR failed: tesseract is not installed"
    assert result.errors[0].error_type == "OCREngineError"
    assert not result.errors[0].is_recoverable
    assert result.stage_statuses[PipelineStage.TEXT_EXTRACTION].status == StageStatus.FAILED
    assert result.stage_statuses[PipelineStage.NAME_EXTRACTION].status == StageStatus.SKIPPED
    assert name_model.calls == []


def test_recoverable_failure_is_not_reported_as_done(label_image):
    result = build(label_source=FailingLabelSource()).run(label_image)

    assert result.summary == ""
    assert not result.is_successful
    assert result.status == "Error: openFDA returned HTTP 500"
    assert result.stage_statuses[PipelineStage.LABEL_FETCH].status == StageStatus.FAILED


def test_name_falls_back_when_local_model_misbehaves(label_image):
    orchestrator = PipelineOrchestrator(
        text_extractor=DummyOCRExtractor(preset_text="IBUPROFEN 200 MG TABLET"),
        name_extractor=MedicationNameExtractor(
            FallbackLanguageModel(GarbledModel(), DummyLanguageModel(default_response="Ibuprofen"))
        ),
        label_source=FakeLabelSource(),
        summarizer=LabelSummarizer(FallbackLanguageModel(None, DummyLanguageModel(default_response=IBUPROFEN_SUMMARY))),
    )
    result = orchestrator.run(label_image)

    assert result.medication_name == "Ibuprofen"
    assert result.summary == IBUPROFEN_SUMMARY
    assert result.status == STATUS_DONE
    assert result.errors == []


def test_fail_fast_skips_stages_after_a_recoverable_failure(label_image, caplog):
    speaker = SilentSpeaker()
    label_source = FailingLabelSource()
    orchestrator = build(
        label_source=label_source,
        speaker=speaker,
        config=OrchestratorConfig(fail_fast=True)
    )

    with caplog.at_level(logging.INFO, logger="gerihealth.pipeline"):
        result = orchestrator.run(label_image, {"speak": True})

    assert label_source.requested == ["Ibuprofen"]
    assert len(result.errors) == 1
    assert result.errors[0].is_recoverable
    assert result.stage_statuses[PipelineStage.LABEL_FETCH].status == StageStatus.FAILED
    assert result.stage_statuses[PipelineStage.SUMMARIZATION].status == StageStatus.SKIPPED
    assert result.stage_statuses[PipelineStage.SPEECH].status == StageStatus.SKIPPED
    assert speaker.spoken == []
    assert "Summarization skipped: fail-fast" in caplog.text
    assert "Speech skipped: fail-fast" in caplog.text


def test_without_fail_fast_later_stages_still_get_their_turn(label_image, caplog):
    orchestrator = build(label_source=FailingLabelSource(), speaker=SilentSpeaker())

    with caplog.at_level(logging.INFO, logger="gerihealth.pipeline"):
        result = orchestrator.run(label_image, {"speak": True})

    assert len(result.errors) == 1
    assert result.stage_statuses[PipelineStage.SUMMARIZATION].status == StageStatus.SKIPPED
    assert "fail-fast" not in caplog.text


def test_status_messages_in_order(label_image):
    orchestrator = build(speaker=SilentSpeaker())
    result = orchestrator.run_partial(label_image, PipelineStage.SPEECH, {"speak": True})

    assert result.status_history == [
        STATUS_RECOGNIZING,
        STATUS_EXTRACTING_NAME,
        STATUS_FETCHING_LABEL,
        STATUS_SUMMARIZING,
        STATUS_SPEAKING,
    ]


def test_speaks_summary_when_asked(label_image):
    speaker = SilentSpeaker()
    result = build(speaker=speaker).run(label_image, {"speak": True})

    assert result.spoken
    assert speaker.spoken == [IBUPROFEN_SUMMARY]


def test_does_not_speak_unless_asked(label_image):
    speaker = SilentSpeaker()
    result = build(speaker=speaker).run(label_image)

    assert not result.spoken
    assert speaker.spoken == []
    assert result.stage_statuses[PipelineStage.SPEECH].status == StageStatus.SKIPPED


def test_never_speaks_a_sentinel(label_image):
    speaker = SilentSpeaker()
    result = build(
        speaker=speaker,
        label_source=FakeLabelSource(text=FETCH_ERROR)
    ).run(label_image, {"speak": True})

    assert not result.spoken
    assert speaker.spoken == []


def test_speech_failure_is_a_warning(label_image):
    result = build(speaker=BrokenSpeaker()).run(label_image, {"speak": True})

    assert result.is_successful
    assert not result.spoken
    assert "Could not read the summary aloud." in result.warnings


def test_disabled_stage_is_skipped(label_image):
    config = OrchestratorConfig(stages={
        PipelineStage.SUMMARIZATION: StageConfig(enabled=False),
    })
    result = build(config=config).run(label_image)

    assert result.summary == ""
    assert result.stage_statuses[PipelineStage.SUMMARIZATION].status == StageStatus.SKIPPED


def test_timeout_stops_remaining_stages(label_image):
    result = build(config=OrchestratorConfig(timeout_seconds=-1)).run(label_image)

    assert result.errors[0].error_type == "PipelineTimeout"
    assert result.recognized_text == ""
    assert not result.is_successful


def test_builder_requires_components():
    with pytest.raises(PipelineConfigurationError) as exc_info:
        PipelineBuilder().with_text_extractor(DummyOCRExtractor()).build()

    assert "label_source" in exc_info.value.details["missing_components"]


def test_stage_names_include_speech_only_with_speaker():
    assert "Speech" not in build().stage_names
    assert build(speaker=SilentSpeaker()).stage_count == 5
