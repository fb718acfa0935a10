from __future__ import annotations

import io
import logging
from datetime import datetime
from typing import Mapping, Sequence

import matplotlib

matplotlib.use("Agg")

from gymtracker.services.stats import trend_line

log = logging.getLogger(__name__)


def render_progress_chart(
    title: str,
    labels: Sequence[datetime],
    weights: Sequence[float],
    *,
    unit: str = "kg",
    dpi: int = 120,
) -> bytes:
    """Line chart of the weights with the trend overlay, as PNG bytes."""
    import matplotlib.pyplot as plt

    fig, ax = plt.subplots(figsize=(6.5, 3.2))
    try:
        ax.plot(labels, weights, marker="o", linewidth=2, color="#2563EB", label="Peso")
        if len(weights) >= 2:
            ax.plot(labels, trend_line(weights), linestyle="--", linewidth=1.5, color="#DC2626", label="Tendencia")
        ax.set_title(title)
        ax.set_xlabel("Fecha")
        ax.set_ylabel(f"Peso ({unit})")
        ax.grid(True, linestyle="--", alpha=0.3)
        ax.legend(loc="upper left")
        fig.autofmt_xdate()
        fig.tight_layout()
        buf = io.BytesIO()
        fig.savefig(buf, format="png", dpi=dpi)
        return buf.getvalue()
    finally:
        plt.close(fig)


def render_chart_snapshots(
    series: Mapping[int, tuple[str, Sequence[datetime], Sequence[float]]],
    *,
    unit: str = "kg",
    dpi: int = 120,
) -> dict[int, bytes]:
    """
    Render one snapshot per exercise id. A chart that fails to render is
    logged and left out; the report goes on without it.
    """
    snapshots: dict[int, bytes] = {}
    for exercise_id, (title, labels, weights) in series.items():
        if not weights:
            continue
        try:
            snapshots[exercise_id] = render_progress_chart(title, labels, weights, unit=unit, dpi=dpi)
        except Exception:
            log.warning("chart render failed for exercise_id=%s; skipping", exercise_id, exc_info=True)
    return snapshots
