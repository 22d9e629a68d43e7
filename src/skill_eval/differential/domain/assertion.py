"""AssertionResult and the pure classification of assertions against two transcripts."""

from collections.abc import Iterable
from enum import StrEnum
from typing import Literal

from pydantic import BaseModel, Field


class Classification(StrEnum):
    """Why a single assertion failed the differential check."""

    BASELINE_CONTAMINATED = "baseline_contaminated"
    MISSING_PATTERN = "missing_pattern"


class AssertionResult(BaseModel, frozen=True):
    """Outcome of checking one assertion against the baseline and treatment outputs.

    The expected arm is always the treatment: the pattern should appear only
    once the knowledge module has been injected.
    """

    assertion: str = Field(min_length=1)
    expected_arm: Literal["treatment"] = "treatment"
    found_in_baseline: bool
    found_in_treatment: bool
    classifications: tuple[Classification, ...] = ()

    @property
    def passed(self) -> bool:
        return not self.classifications


def contains_literal(text: str, assertion: str) -> bool:
    """Case-sensitive literal substring match; no regex, no normalisation."""
    return assertion in text


def classify_assertion(
    assertion: str, baseline_text: str, treatment_text: str
) -> AssertionResult:
    found_in_baseline = contains_literal(baseline_text, assertion)
    found_in_treatment = contains_literal(treatment_text, assertion)

    classifications: list[Classification] = []
    if found_in_baseline:
        classifications.append(Classification.BASELINE_CONTAMINATED)
    if not found_in_treatment:
        classifications.append(Classification.MISSING_PATTERN)

    return AssertionResult(
        assertion=assertion,
        found_in_baseline=found_in_baseline,
        found_in_treatment=found_in_treatment,
        classifications=tuple(classifications),
    )


def classify_assertions(
    assertions: Iterable[str], baseline_text: str, treatment_text: str
) -> list[AssertionResult]:
    """Classify every assertion, preserving the scenario's declared order."""
    return [
        classify_assertion(assertion, baseline_text, treatment_text)
        for assertion in assertions
    ]
