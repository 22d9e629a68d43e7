"""Tests for run directory naming."""

from datetime import UTC, datetime

import pytest

from skill_eval.results.domain.run_dir import run_dir_name

_STARTED = datetime(2025, 1, 15, 10, 30, 5, tzinfo=UTC)


class TestRunDirName:
    def test_first_attempt_has_no_suffix(self) -> None:
        assert run_dir_name("mailer", _STARTED) == "20250115_103005_mailer"

    def test_later_attempts_are_suffixed(self) -> None:
        assert run_dir_name("mailer", _STARTED, attempt=2) == "20250115_103005_mailer_2"

    def test_attempts_in_same_second_are_distinct(self) -> None:
        names = {run_dir_name("mailer", _STARTED, attempt) for attempt in range(1, 6)}
        assert len(names) == 5

    def test_rejects_attempt_zero(self) -> None:
        with pytest.raises(ValueError):
            run_dir_name("mailer", _STARTED, attempt=0)
