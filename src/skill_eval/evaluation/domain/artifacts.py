"""RunArtifacts — collects everything a run captures, as it is captured."""

from skill_eval.agent.domain.transcript import Transcript
from skill_eval.differential.domain.assertion import AssertionResult
from skill_eval.judge.domain.judgment import Judgment


class RunArtifacts:
    """Mutable per-run collector owned by exactly one run.

    Transcripts are recorded the moment each invocation returns, so an abort
    later in the run still leaves the earlier artifacts available to persist.
    """

    def __init__(self) -> None:
        self.transcripts: list[Transcript] = []
        self.judgments: list[Judgment] = []
        self.assertion_results: list[AssertionResult] = []
        self.judge_ms = 0

    def record_transcript(self, transcript: Transcript) -> None:
        self.transcripts.append(transcript)

    def record_judgments(self, judgments: list[Judgment], duration_ms: int = 0) -> None:
        self.judgments.extend(judgments)
        self.judge_ms += duration_ms

    def record_assertion_results(self, results: list[AssertionResult]) -> None:
        self.assertion_results.extend(results)

    @property
    def agent_ms(self) -> int:
        return sum(t.duration_ms for t in self.transcripts)
