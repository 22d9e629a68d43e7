"""Fake judge factories — return a shared fake judge for every create call."""

from tests.judge.fake_judge import FakeDomainJudge, FakePanelJudge


class FakeDomainJudgeFactory:
    """Satisfies the DomainJudgeFactory protocol."""

    def __init__(self, judge: FakeDomainJudge | None = None) -> None:
        self.judge = judge if judge is not None else FakeDomainJudge()
        self.created: list[str] = []

    def create(self, scenario_id: str) -> FakeDomainJudge:
        self.created.append(scenario_id)
        return self.judge


class FakePanelJudgeFactory:
    """Satisfies the PanelJudgeFactory protocol."""

    def __init__(self) -> None:
        self.judge = FakePanelJudge()
        self.created: list[str] = []

    def create(self, scenario_id: str) -> FakePanelJudge:
        self.created.append(scenario_id)
        return self.judge
