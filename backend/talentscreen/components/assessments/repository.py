"""Assessment and result rows in the record store."""

from __future__ import annotations

import json
from datetime import date
from typing import Any, Optional

from ...shared.utils import link_ids, parse_date, select_value
from ..records import tables
from ..records.store import LINK_HAS_SUFFIX, RecordStore
from ..taxonomy.scoring import ProfileScores
from ..taxonomy.taxonomy import Dimension
from .models import Assessment, AssessmentResult, AssessmentStatus


def _first_id(value: Any) -> Optional[int]:
    ids = link_ids(value)
    return ids[0] if ids else None


def _as_float(value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def _as_text(value: Any) -> Optional[str]:
    if value is None or isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False)


def assessment_from_row(row: dict[str, Any]) -> Assessment:
    return Assessment(
        id=int(row["id"]),
        token=str(row.get(tables.ASSESSMENT_TOKEN) or ""),
        status=AssessmentStatus.coerce(select_value(row.get(tables.ASSESSMENT_STATUS))),
        candidate_id=_first_id(row.get(tables.ASSESSMENT_CANDIDATE)),
        expires_on=parse_date(row.get(tables.ASSESSMENT_EXPIRES)),
    )


def result_from_row(row: dict[str, Any]) -> AssessmentResult:
    step1, step2, step3 = (_as_text(row.get(name)) for name in tables.RESULT_STEP_FIELDS)
    return AssessmentResult(
        id=int(row["id"]),
        assessment_id=_first_id(row.get(tables.RESULT_ASSESSMENT)),
        executor=_as_float(row.get(Dimension.EXECUTOR.field)),
        comunicador=_as_float(row.get(Dimension.COMUNICADOR.field)),
        planejador=_as_float(row.get(Dimension.PLANEJADOR.field)),
        analista=_as_float(row.get(Dimension.ANALISTA.field)),
        steps=(step1, step2, step3),
        narrative_payload=_as_text(row.get(tables.RESULT_NARRATIVE)) or None,
    )


def insert_assessment(store: RecordStore, candidate_id: int, token: str, expires_on: date) -> Assessment:
    row = store.insert_row(
        tables.assessments_table(),
        {
            tables.ASSESSMENT_CANDIDATE: [candidate_id],
            tables.ASSESSMENT_TOKEN: token,
            tables.ASSESSMENT_STATUS: AssessmentStatus.PENDING.value,
            tables.ASSESSMENT_EXPIRES: expires_on.isoformat(),
        },
    )
    return assessment_from_row(row)


def find_assessment_by_token(store: RecordStore, token: str) -> Optional[Assessment]:
    rows = store.list_rows(tables.assessments_table(), {tables.ASSESSMENT_TOKEN: token})
    # Exact match regardless of the backend's filter semantics
    for row in rows:
        if row.get(tables.ASSESSMENT_TOKEN) == token:
            return assessment_from_row(row)
    return None


def get_assessment(store: RecordStore, assessment_id: int) -> Optional[Assessment]:
    row = store.get_row(tables.assessments_table(), assessment_id)
    return assessment_from_row(row) if row else None


def list_candidate_assessments(store: RecordStore, candidate_id: int) -> list[Assessment]:
    rows = store.list_rows(
        tables.assessments_table(),
        {f"{tables.ASSESSMENT_CANDIDATE}{LINK_HAS_SUFFIX}": candidate_id},
    )
    return sorted((assessment_from_row(row) for row in rows), key=lambda a: a.id)


def mark_assessment_completed(store: RecordStore, assessment_id: int) -> Assessment:
    row = store.update_row(
        tables.assessments_table(),
        assessment_id,
        {tables.ASSESSMENT_STATUS: AssessmentStatus.COMPLETED.value},
    )
    return assessment_from_row(row)


def find_result_row(store: RecordStore, assessment_id: int) -> Optional[dict[str, Any]]:
    rows = store.list_rows(
        tables.results_table(),
        {f"{tables.RESULT_ASSESSMENT}{LINK_HAS_SUFFIX}": assessment_id},
    )
    if not rows:
        return None
    return min(rows, key=lambda row: int(row["id"]))


def insert_result(
    store: RecordStore,
    assessment_id: int,
    scores: ProfileScores,
    steps: tuple[list[str], list[str], list[str]],
    narrative_payload: Optional[str],
) -> dict[str, Any]:
    data: dict[str, Any] = {tables.RESULT_ASSESSMENT: [assessment_id], **scores.as_dict()}
    for name, selections in zip(tables.RESULT_STEP_FIELDS, steps):
        data[name] = json.dumps(list(selections), ensure_ascii=False)
    data[tables.RESULT_NARRATIVE] = narrative_payload
    return store.insert_row(tables.results_table(), data)
