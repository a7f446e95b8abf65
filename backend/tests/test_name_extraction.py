"""
Medication name extraction and label summarization.
"""

from dataclasses import dataclass
from typing import List

import pytest

from gerihealth.application.prompts import NAME_EXTRACTION_INSTRUCTIONS, SUMMARY_INSTRUCTIONS
from gerihealth.application.services.name_extraction import (
    MedicationNameExtractor,
    clean_medication_name,
)
from gerihealth.application.services.summarization import LabelSummarizer
from gerihealth.domain.exceptions import InvalidInputError
from gerihealth.domain.messages import FETCH_ERROR, GEMINI_ERROR
from gerihealth.infrastructure.llm.dummy_llm import DummyLanguageModel
from gerihealth.infrastructure.llm.fallback import FallbackLanguageModel


@dataclass
class Case:
    id: str
    raw: str
    expected: str


CASES: List[Case] = [
    Case("C01", "Lisinopril", "Lisinopril"),
    Case("C02", "ATORVASTATIN\n", "ATORVASTATIN"),
    Case("C03", '"Lisinopril"', "Lisinopril"),
    Case("C04", "**Metformin**", "Metformin"),
    Case("C05", "Medication: Amlodipine.", "Amlodipine"),
    Case("C06", "Drug name: `Warfarin`", "Warfarin"),
    Case("C07", "\n\nLevothyroxine\nThis is used for thyroid.", "Levothyroxine"),
    Case("C08", "Acetaminophen   and   Codeine", "Acetaminophen and Codeine"),
    Case("C09", "   ", ""),
]


@pytest.mark.parametrize("case", CASES, ids=[c.id for c in CASES])
def test_clean_medication_name(case):
    assert clean_medication_name(case.raw) == case.expected


def test_extract_sends_ocr_text_and_instructions():
    model = DummyLanguageModel(default_response="Lisinopril")
    extractor = MedicationNameExtractor(model)

    assert extractor.extract_medication_name("Take one tablet of Lisinopril 20mg daily") == "Lisinopril"
    assert model.calls == [("Take one tablet of Lisinopril 20mg daily", NAME_EXTRACTION_INSTRUCTIONS)]


def test_extract_passes_sentinel_through():
    extractor = MedicationNameExtractor(FallbackLanguageModel(DummyLanguageModel(fail=True), None))
    assert extractor.extract_medication_name("ATORVASTATIN 10 MG TABLET") == GEMINI_ERROR


def test_extract_empty_answer_is_sentinel():
    extractor = MedicationNameExtractor(DummyLanguageModel(default_response='""'))
    assert extractor.extract_medication_name("ATORVASTATIN 10 MG TABLET") == GEMINI_ERROR


def test_extract_rejects_blank_text():
    model = DummyLanguageModel()
    with pytest.raises(InvalidInputError):
        MedicationNameExtractor(model).extract_medication_name("  \n ")
    assert model.calls == []


def test_summarize_uses_summary_instructions():
    model = DummyLanguageModel(default_response="  Lowers blood pressure. Take once a day.  ")
    summary = LabelSummarizer(model).summarize("Lisinopril inhibits ACE.")

    assert summary == "Lowers blood pressure. Take once a day."
    assert model.calls[0][1] == SUMMARY_INSTRUCTIONS


@pytest.mark.parametrize("sentinel", [GEMINI_ERROR, FETCH_ERROR])
def test_summarize_passes_sentinel_through(sentinel):
    model = DummyLanguageModel()
    assert LabelSummarizer(model).summarize(sentinel) == sentinel
    assert model.calls == []


def test_summarize_model_failure_is_sentinel():
    summarizer = LabelSummarizer(FallbackLanguageModel(None, DummyLanguageModel(fail=True)))
    assert summarizer.summarize("Lisinopril inhibits ACE.") == GEMINI_ERROR


def test_summarize_blank_answer_is_sentinel():
    assert LabelSummarizer(DummyLanguageModel(default_response="")).summarize("text") == GEMINI_ERROR


def test_summarize_rejects_blank_label():
    with pytest.raises(InvalidInputError):
        LabelSummarizer(DummyLanguageModel()).summarize("")
