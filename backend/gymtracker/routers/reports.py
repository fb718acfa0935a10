import logging
from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session
from gymtracker.db import get_db
from gymtracker.models import Profile
from gymtracker.schemas.report import ReportConfig
from gymtracker.repositories.exercise_repo import ExerciseRepository
from gymtracker.repositories.progress_repo import ProgressRepository
from gymtracker.services.charts import render_chart_snapshots
from gymtracker.services.reports import ExerciseSection, build_progress_report
from gymtracker.settings import get_settings
from gymtracker.deps.auth import get_current_profile

log = logging.getLogger(__name__)

router = APIRouter(prefix="/reports", tags=["reports"])

@router.post("", response_class=Response)
def export_report(payload: ReportConfig, db: Session = Depends(get_db), current: Profile = Depends(get_current_profile)):
    wanted = list(dict.fromkeys(payload.exercise_ids))
    exercises = ExerciseRepository(db).list_owned(wanted, current.id)
    if {ex.id for ex in exercises} != set(wanted):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Exercise not found")

    progress = ProgressRepository(db)
    sections = []
    for ex in exercises:
        entries = progress.list_for_exercise(ex.id, start=payload.start_date, end=payload.end_date)
        sections.append(
            ExerciseSection(
                exercise_id=ex.id,
                name=ex.name,
                day_name=ex.day.day_name,
                entries=[(float(e.weight), e.created_at, e.notes) for e in entries],
            )
        )

    s = get_settings()
    charts = {}
    if payload.include_charts:
        charts = render_chart_snapshots(
            {sec.exercise_id: (sec.name, [ts for _, ts, _ in sec.entries], [w for w, _, _ in sec.entries])
             for sec in sections},
            unit=s.WEIGHT_UNIT,
            dpi=s.REPORT_CHART_DPI,
        )

    pdf = build_progress_report(payload, sections, charts, unit=s.WEIGHT_UNIT)
    log.info("report user=%s exercises=%d charts=%d bytes=%d",
             current.id, len(sections), len(charts), len(pdf))
    return Response(
        content=pdf,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{payload.filename}"'},
    )
