"""Run directory naming — pure, collision-aware names for per-run artifact directories."""

from datetime import datetime

_TIMESTAMP_FORMAT = "%Y%m%d_%H%M%S"


def run_dir_name(scenario_id: str, started_at: datetime, attempt: int = 1) -> str:
    """Return ``YYYYMMDD_HHMMSS_<scenario_id>``, suffixed ``_<attempt>`` from attempt 2.

    Callers bump ``attempt`` when a directory of the same name already exists,
    so two runs started within the same second never share a directory.
    """
    if attempt < 1:
        raise ValueError(f"attempt must be >= 1, got {attempt}")
    base = f"{started_at.strftime(_TIMESTAMP_FORMAT)}_{scenario_id}"
    return base if attempt == 1 else f"{base}_{attempt}"
