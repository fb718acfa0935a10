from __future__ import annotations

import io
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Mapping, Sequence
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import Image, PageBreak, Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from gymtracker.schemas.report import ReportConfig
from gymtracker.services.stats import ProgressStats, compute_progress_stats


@dataclass
class ExerciseSection:
    exercise_id: int
    name: str
    day_name: str
    # (weight, timestamp, notes), oldest first
    entries: list[tuple[float, datetime, str | None]] = field(default_factory=list)

    @property
    def stats(self) -> ProgressStats:
        return compute_progress_stats((w, ts) for w, ts, _ in self.entries)


_HEADER_STYLE = [
    ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#1F3C88")),
    ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
    ("ALIGN", (0, 0), (-1, -1), "LEFT"),
    ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
    ("BOTTOMPADDING", (0, 0), (-1, 0), 8),
    ("BACKGROUND", (0, 1), (-1, -1), colors.whitesmoke),
    ("GRID", (0, 0), (-1, -1), 0.5, colors.lightgrey),
]


def _fmt(value: float | None, unit: str = "", digits: int = 1) -> str:
    if value is None:
        return "n/a"
    text = f"{value:.{digits}f}"
    return f"{text} {unit}".strip()


def _stats_table(stats: ProgressStats, unit: str) -> Table:
    rows = [
        ["Métrica", "Valor"],
        ["Registros", str(stats.total_entries)],
        ["Peso máximo", _fmt(stats.max_weight, unit)],
        ["Peso mínimo", _fmt(stats.min_weight, unit)],
        ["Promedio", _fmt(stats.avg_weight, unit)],
        ["Último peso", _fmt(stats.latest_weight, unit)],
        ["Progresión", _fmt(stats.progression, "%")],
    ]
    table = Table(rows, hAlign="LEFT", colWidths=[2.2 * inch, 2.8 * inch])
    table.setStyle(TableStyle(_HEADER_STYLE))
    return table


def _entries_table(section: ExerciseSection, unit: str) -> Table:
    rows = [["Fecha", f"Peso ({unit})", "Notas"]]
    for weight, ts, notes in section.entries:
        rows.append([ts.strftime("%Y-%m-%d %H:%M"), f"{weight:.2f}", notes or ""])
    # repeatRows keeps the header on every page the table spills onto
    table = Table(rows, hAlign="LEFT", colWidths=[1.6 * inch, 1.2 * inch, 3.6 * inch], repeatRows=1)
    table.setStyle(TableStyle(_HEADER_STYLE))
    return table


def build_progress_report(
    config: ReportConfig,
    sections: Sequence[ExerciseSection],
    charts: Mapping[int, bytes] | None = None,
    *,
    unit: str = "kg",
    generated_on: date | None = None,
) -> bytes:
    """
    Lay out a paginated progress report and return the PDF bytes.

    ``charts`` maps exercise id to a PNG snapshot; sections without one are
    rendered without a chart.
    """
    charts = charts or {}
    styles = getSampleStyleSheet()
    buf = io.BytesIO()
    doc = SimpleDocTemplate(
        buf,
        pagesize=A4,
        title=config.title,
        leftMargin=0.7 * inch,
        rightMargin=0.7 * inch,
        topMargin=0.7 * inch,
        bottomMargin=0.7 * inch,
    )

    story = [
        Paragraph(escape(config.title), styles["Title"]),
        Paragraph(
            f"Periodo: {config.start_date.isoformat()} – {config.end_date.isoformat()}",
            styles["BodyText"],
        ),
        Paragraph(
            f"Generado: {(generated_on or date.today()).isoformat()} | Ejercicios: {len(sections)}",
            styles["BodyText"],
        ),
        Spacer(1, 0.25 * inch),
    ]

    if not sections:
        story.append(Paragraph("No hay ejercicios para el periodo seleccionado.", styles["BodyText"]))

    for index, section in enumerate(sections):
        if index:
            story.append(PageBreak())
        story.append(Paragraph(escape(section.name), styles["Heading2"]))
        story.append(Paragraph(escape(section.day_name), styles["Heading4"]))

        if not section.entries:
            story.append(Paragraph("Sin registros en el periodo.", styles["BodyText"]))
            continue

        if config.include_stats:
            story.append(Spacer(1, 0.1 * inch))
            story.append(_stats_table(section.stats, unit))

        snapshot = charts.get(section.exercise_id) if config.include_charts else None
        if snapshot:
            story.append(Spacer(1, 0.2 * inch))
            story.append(Image(io.BytesIO(snapshot), width=6.5 * inch, height=3.2 * inch))

        story.append(Spacer(1, 0.2 * inch))
        story.append(Paragraph("Historial", styles["Heading3"]))
        story.append(_entries_table(section, unit))

    doc.build(story)
    return buf.getvalue()
