"""Markdown rendering of transcripts and run summaries for the run directory."""

from skill_eval.agent.domain.transcript import Transcript
from skill_eval.evaluation.domain.summary import RunKind, RunSummary


def render_transcript(transcript: Transcript) -> str:
    lines = [
        f"# {transcript.scenario_id}: {transcript.variant} transcript",
        "",
        f"- Captured: {transcript.captured_at.isoformat()}",
        f"- Duration: {transcript.duration_ms} ms",
    ]
    if transcript.num_turns is not None:
        lines.append(f"- Turns: {transcript.num_turns}")
    if transcript.cost_usd is not None:
        lines.append(f"- Cost: ${transcript.cost_usd:.4f}")
    lines += ["", "---", "", transcript.text.rstrip(), ""]
    return "\n".join(lines)


def render_summary(summary: RunSummary) -> str:
    """Render summary.md. Critical blockers come before the score."""
    lines = [
        f"# {summary.scenario_id}",
        "",
        f"- Kind: {summary.kind}",
        f"- Outcome: **{summary.outcome.upper()}**",
        f"- Started: {summary.started_at.isoformat()}",
        f"- Git: {summary.git.sha} ({summary.git.branch})",
        f"- Timings: agent {summary.timings.agent_ms} ms, "
        f"judge {summary.timings.judge_ms} ms, total {summary.timings.total_ms} ms",
        "",
    ]

    if summary.error_message:
        lines += ["## Error", "", f"`{summary.error_kind}`: {summary.error_message}", ""]

    if summary.critical_blockers:
        lines += ["## Critical Blockers", ""]
        lines += [f"- **{b.domain}**: {b.description}" for b in summary.critical_blockers]
        lines.append("")

    if summary.kind is RunKind.JUDGED and summary.judgments:
        threshold_pct = summary.threshold_fraction * 100
        lines += [
            "## Score",
            "",
            f"**{summary.total_score}/{summary.max_score}** "
            f"({summary.percentage:.1f}%, threshold {threshold_pct:.0f}%)",
            "",
            "| Domain | Score | Max |",
            "|---|---|---|",
        ]
        lines += [f"| {j.domain} | {j.score} | {j.max_score} |" for j in summary.judgments]
        lines.append("")
        if summary.under_threshold_domains:
            lines += [
                "Under threshold: " + ", ".join(summary.under_threshold_domains),
                "",
            ]
        for judgment in summary.judgments:
            if not judgment.issues and not judgment.suggestions:
                continue
            lines += [f"### {judgment.domain}", ""]
            lines += [f"- Issue: {issue}" for issue in judgment.issues]
            lines += [f"- Suggestion: {s}" for s in judgment.suggestions]
            lines.append("")

    if summary.assertion_results:
        lines += [
            "## Assertions",
            "",
            "| Assertion | Baseline | Treatment | Classification |",
            "|---|---|---|---|",
        ]
        for result in summary.assertion_results:
            classes = ", ".join(result.classifications) or "ok"
            lines.append(
                f"| `{result.assertion}` | {_yes_no(result.found_in_baseline)} "
                f"| {_yes_no(result.found_in_treatment)} | {classes} |"
            )
        lines.append("")

    return "\n".join(lines)


def _yes_no(value: bool) -> str:
    return "found" if value else "absent"
