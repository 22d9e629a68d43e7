"""Terminal rendering for run results, the ledger table and the scenario list."""

from pathlib import Path

import typer

from skill_eval.evaluation.domain.summary import RunKind, RunOutcome, RunSummary
from skill_eval.results.domain.ledger import LedgerEntry, pass_rate

# ---------------------------------------------------------------------------
# ANSI helpers
# ---------------------------------------------------------------------------
_RESET = "\033[0m"
_BOLD = "\033[1m"
_DIM = "\033[2m"
_CYAN = "\033[36m"
_YELLOW = "\033[33m"
_GREEN = "\033[32m"
_RED = "\033[31m"
_WHITE = "\033[97m"

_OUTCOME_COLORS = {
    RunOutcome.PASS: _GREEN,
    RunOutcome.FAIL: _RED,
    RunOutcome.ERROR: _YELLOW,
}


def _rule(width: int = 72, color: str = _DIM) -> None:
    typer.echo(f"{color}{'─' * width}{_RESET}")


def _fraction_color(fraction: float, threshold: float) -> str:
    if fraction >= threshold:
        return _GREEN
    if fraction >= threshold - 0.15:
        return _YELLOW
    return _RED


def _format_ms(duration_ms: int) -> str:
    """Format milliseconds as '1m 23.4s' or '5.2s'."""
    minutes, seconds = divmod(duration_ms / 1000, 60)
    if minutes >= 1:
        return f"{int(minutes)}m {seconds:.1f}s"
    return f"{duration_ms / 1000:.1f}s"


def _outcome_label(outcome: RunOutcome) -> str:
    return f"{_OUTCOME_COLORS[outcome]}{_BOLD}{outcome.upper()}{_RESET}"


def print_run_report(summary: RunSummary, run_dir: Path) -> None:
    """Print the result of one run.

    Critical blockers are printed first, ahead of the score, because any
    blocker fails the run whatever the percentage says.
    """
    typer.echo("")
    _rule(color=_CYAN)
    typer.echo(
        f"{_CYAN}{_BOLD}  {summary.scenario_id}{_RESET}"
        f"  {_DIM}{summary.kind}{_RESET}  {_outcome_label(summary.outcome)}"
    )
    _rule(color=_CYAN)

    if summary.critical_blockers:
        typer.echo("")
        typer.echo(f"  {_RED}{_BOLD}Critical blockers{_RESET}")
        for blocker in summary.critical_blockers:
            typer.echo(f"  {_RED}✗{_RESET} [{blocker.domain}] {blocker.description}")

    if summary.kind is RunKind.JUDGED and summary.judgments:
        _print_scores(summary)

    if summary.failed_assertions:
        typer.echo("")
        typer.echo(f"  {_RED}{_BOLD}Failing assertions{_RESET}")
        for result in summary.failed_assertions:
            classes = ", ".join(c.upper() for c in result.classifications)
            typer.echo(f"  {_RED}✗{_RESET} {result.assertion}  {_DIM}{classes}{_RESET}")
    elif summary.assertion_results:
        typer.echo("")
        typer.echo(
            f"  {_GREEN}All {len(summary.assertion_results)} assertions passed{_RESET}"
        )

    if summary.error_message:
        typer.echo("")
        typer.echo(
            f"  {_YELLOW}{_BOLD}Infrastructure error{_RESET} "
            f"{_DIM}({summary.error_kind}){_RESET}"
        )
        typer.echo(f"  {summary.error_message}")

    typer.echo("")
    meta_rows = [
        ("Timings", f"agent {_format_ms(summary.timings.agent_ms)}, "
         f"judge {_format_ms(summary.timings.judge_ms)}, "
         f"total {_format_ms(summary.timings.total_ms)}"),
        ("Git", f"{summary.git.sha} ({summary.git.branch})"),
        ("Artifacts", str(run_dir)),
    ]
    label_w = max(len(label) for label, _ in meta_rows)
    for label, value in meta_rows:
        typer.echo(f"  {_DIM}{label:<{label_w}}{_RESET}  {_WHITE}{value}{_RESET}")
    typer.echo("")


def _print_scores(summary: RunSummary) -> None:
    threshold = summary.threshold_fraction
    color = _fraction_color(summary.percentage / 100, threshold)
    typer.echo("")
    typer.echo(
        f"  {_BOLD}Score{_RESET}  {color}{summary.total_score}/{summary.max_score}"
        f" ({summary.percentage:.1f}%){_RESET}"
        f"  {_DIM}threshold {threshold * 100:.0f}%{_RESET}"
    )
    domain_w = max(len(j.domain) for j in summary.judgments)
    for judgment in summary.judgments:
        j_color = _fraction_color(judgment.fraction, threshold)
        filled = round(judgment.fraction * 10)
        bar = f"{j_color}{'█' * filled}{_DIM}{'░' * (10 - filled)}{_RESET}"
        typer.echo(
            f"  {_WHITE}{judgment.domain:<{domain_w}}{_RESET}"
            f"  {j_color}{judgment.score:>3}/{judgment.max_score:<3}{_RESET}  {bar}"
        )
    if summary.under_threshold_domains:
        typer.echo(
            f"  {_YELLOW}Under threshold:{_RESET} "
            + ", ".join(summary.under_threshold_domains)
        )


def print_ledger(entries: list[LedgerEntry]) -> None:
    """Print the cumulative ledger with per-domain scores and the behavioral pass rate."""
    typer.echo("")
    _rule(color=_CYAN)
    typer.echo(f"{_CYAN}{_BOLD}  skill-eval  ·  Ledger{_RESET}")
    _rule(color=_CYAN)

    if not entries:
        typer.echo(f"  {_DIM}No runs recorded yet.{_RESET}")
        typer.echo("")
        return

    domains = sorted({d for e in entries for d in e.domain_scores})
    name_w = max(len("Scenario"), *(len(e.scenario_id) for e in entries))
    branch_w = max(len("Branch"), *(len(e.branch) for e in entries))

    header = f"  {_DIM}{'Scenario':<{name_w}}  {'Branch':<{branch_w}}  {'Outcome':<7}"
    for domain in domains:
        header += f"  {domain:>9}"
    header += f"  {'Total':>9}  {'Last run':<16}{_RESET}"
    typer.echo(header)

    for entry in entries:
        color = _OUTCOME_COLORS[entry.outcome]
        row = (
            f"  {_WHITE}{entry.scenario_id:<{name_w}}{_RESET}"
            f"  {entry.branch:<{branch_w}}"
            f"  {color}{entry.outcome.upper():<7}{_RESET}"
        )
        for domain in domains:
            if domain in entry.domain_scores:
                cell = f"{entry.domain_scores[domain]}/{entry.domain_max_scores[domain]}"
            else:
                cell = "-"
            row += f"  {cell:>9}"
        if entry.kind is RunKind.JUDGED and entry.max_score:
            total = f"{entry.total_score}/{entry.max_score}"
        elif entry.assertions_total:
            passed = entry.assertions_total - entry.assertions_failed
            total = f"{passed}/{entry.assertions_total} ok"
        else:
            total = "-"
        row += f"  {total:>9}  {entry.last_run_at.strftime('%Y-%m-%d %H:%M'):<16}"
        typer.echo(row)

    typer.echo("")
    rate = pass_rate(entries)
    errors = sum(1 for e in entries if e.outcome is RunOutcome.ERROR)
    rate_text = "n/a" if rate is None else f"{rate * 100:.0f}%"
    typer.echo(
        f"  {_BOLD}Pass rate{_RESET} {rate_text}"
        f"  {_DIM}(behavioral runs only; {errors} infrastructure error(s) excluded){_RESET}"
    )
    typer.echo("")


def print_scenario_list(rows: list[tuple[str, str, str]]) -> None:
    """Print (name, kind, title) rows."""
    if not rows:
        typer.echo(f"{_DIM}No scenarios found.{_RESET}")
        return
    name_w = max(len(name) for name, _, _ in rows)
    kind_w = max(len(kind) for _, kind, _ in rows)
    for name, kind, title in rows:
        typer.echo(
            f"  {_WHITE}{name:<{name_w}}{_RESET}  {_CYAN}{kind:<{kind_w}}{_RESET}"
            f"  {_DIM}{title}{_RESET}"
        )
