# -*- coding: utf-8 -*-
"""Workouts: session, set and personal-record storage (SQLite)."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional
from uuid import uuid4

from fastapi import HTTPException

from ..app_db import db_conn
from ..config import settings
from ..exercises.catalog import get_muscle_group_for
from .models import PersonalRecord, PreviousSessionData, WorkoutSession, WorkoutSet

logger = logging.getLogger(__name__)


def _iso(dt: datetime) -> str:
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).isoformat(timespec="seconds")


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _parse(value: str) -> datetime:
    dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def _row_to_session(row: Any) -> WorkoutSession:
    return WorkoutSession.model_validate(dict(row))


def _row_to_set(row: Any) -> WorkoutSet:
    return WorkoutSet.model_validate(dict(row))


# ---- Sessions ----


def create_session(user_id: str, *, name: str, started_at: Optional[datetime] = None) -> WorkoutSession:
    now = _utc_now()
    session = WorkoutSession(
        id=str(uuid4()),
        user_id=user_id,
        name=name.strip(),
        started_at=_iso(started_at or now),
        ended_at=None,
        duration_minutes=None,
        created_at=_iso(now),
    )
    with db_conn(settings.app_db_path) as conn:
        conn.execute(
            """
            INSERT INTO workout_sessions (id, user_id, name, started_at, ended_at, duration_minutes, created_at)
            VALUES (?, ?, ?, ?, ?, ?, ?)
            """,
            (session.id, user_id, session.name, session.started_at, None, None, session.created_at),
        )
    logger.info("workout session created: %s (%s)", session.id, session.name)
    return session


def get_session(user_id: str, session_id: str) -> WorkoutSession:
    with db_conn(settings.app_db_path) as conn:
        row = conn.execute(
            "SELECT * FROM workout_sessions WHERE id = ? AND user_id = ?",
            (session_id, user_id),
        ).fetchone()
    if not row:
        raise HTTPException(status_code=404, detail="Workout session not found")
    return _row_to_session(row)


def finish_session(user_id: str, session_id: str, *, ended_at: Optional[datetime] = None) -> WorkoutSession:
    session = get_session(user_id, session_id)
    if not session.is_open:
        return session
    end = ended_at or _utc_now()
    duration = max(int((end - _parse(session.started_at)).total_seconds() // 60), 0)
    with db_conn(settings.app_db_path) as conn:
        conn.execute(
            "UPDATE workout_sessions SET ended_at = ?, duration_minutes = ? WHERE id = ? AND user_id = ?",
            (_iso(end), duration, session_id, user_id),
        )
    return get_session(user_id, session_id)


def list_sessions(user_id: str, *, limit: Optional[int] = None) -> List[WorkoutSession]:
    sql = "SELECT * FROM workout_sessions WHERE user_id = ? ORDER BY started_at DESC"
    params: list[Any] = [user_id]
    if limit:
        sql += " LIMIT ?"
        params.append(int(limit))
    with db_conn(settings.app_db_path) as conn:
        rows = conn.execute(sql, params).fetchall()
    return [_row_to_session(r) for r in rows]


def log_gym_class(
    user_id: str,
    *,
    class_type: str,
    duration_minutes: int,
    ended_at: Optional[datetime] = None,
) -> WorkoutSession:
    """Record a group class as an already-closed session."""
    end = ended_at or _utc_now()
    start = end - timedelta(minutes=int(duration_minutes))
    session = WorkoutSession(
        id=str(uuid4()),
        user_id=user_id,
        name=f"{class_type} Class",
        started_at=_iso(start),
        ended_at=_iso(end),
        duration_minutes=int(duration_minutes),
        created_at=_iso(_utc_now()),
    )
    with db_conn(settings.app_db_path) as conn:
        conn.execute(
            """
            INSERT INTO workout_sessions (id, user_id, name, started_at, ended_at, duration_minutes, created_at)
            VALUES (?, ?, ?, ?, ?, ?, ?)
            """,
            (
                session.id,
                user_id,
                session.name,
                session.started_at,
                session.ended_at,
                session.duration_minutes,
                session.created_at,
            ),
        )
    logger.info("gym class logged: %s %dmin", class_type, duration_minutes)
    return session


# ---- Sets ----


def add_set(
    user_id: str,
    session_id: str,
    *,
    exercise_id: str,
    set_number: int,
    reps: Optional[int] = None,
    weight_lbs: Optional[float] = None,
    duration_seconds: Optional[int] = None,
    rest_seconds: Optional[int] = None,
    completed_at: Optional[datetime] = None,
) -> WorkoutSet:
    get_session(user_id, session_id)
    workout_set = WorkoutSet(
        id=str(uuid4()),
        workout_session_id=session_id,
        exercise_id=exercise_id,
        set_number=set_number,
        reps=reps,
        weight_lbs=weight_lbs,
        duration_seconds=duration_seconds,
        rest_seconds=rest_seconds,
        completed_at=_iso(completed_at or _utc_now()),
    )
    with db_conn(settings.app_db_path) as conn:
        conn.execute(
            """
            INSERT INTO workout_sets (
                id, workout_session_id, exercise_id, set_number, reps, weight_lbs,
                duration_seconds, rest_seconds, completed_at
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                workout_set.id,
                session_id,
                exercise_id,
                set_number,
                reps,
                weight_lbs,
                duration_seconds,
                rest_seconds,
                workout_set.completed_at,
            ),
        )
        if weight_lbs is not None and reps:
            _update_personal_record(conn, user_id, workout_set)
    return workout_set


def _update_personal_record(conn: Any, user_id: str, workout_set: WorkoutSet) -> None:
    row = conn.execute(
        "SELECT max_weight_lbs, reps FROM personal_records WHERE user_id = ? AND exercise_id = ?",
        (user_id, workout_set.exercise_id),
    ).fetchone()
    candidate = (float(workout_set.weight_lbs or 0.0), int(workout_set.reps or 0))
    if row and (float(row["max_weight_lbs"]), int(row["reps"])) >= candidate:
        return
    conn.execute(
        """
        INSERT INTO personal_records (user_id, exercise_id, max_weight_lbs, reps, achieved_at)
        VALUES (?, ?, ?, ?, ?)
        ON CONFLICT(user_id, exercise_id) DO UPDATE SET
            max_weight_lbs = excluded.max_weight_lbs,
            reps = excluded.reps,
            achieved_at = excluded.achieved_at
        """,
        (user_id, workout_set.exercise_id, candidate[0], candidate[1], workout_set.completed_at),
    )
    logger.info("new personal record: %s %.1f x %d", workout_set.exercise_id, candidate[0], candidate[1])


def get_sets(user_id: str, session_id: str) -> List[WorkoutSet]:
    get_session(user_id, session_id)
    with db_conn(settings.app_db_path) as conn:
        rows = conn.execute(
            "SELECT * FROM workout_sets WHERE workout_session_id = ? ORDER BY set_number ASC, completed_at ASC",
            (session_id,),
        ).fetchall()
    return [_row_to_set(r) for r in rows]


# ---- Personal records ----


def get_personal_record(user_id: str, exercise_id: str) -> Optional[PersonalRecord]:
    with db_conn(settings.app_db_path) as conn:
        row = conn.execute(
            "SELECT exercise_id, max_weight_lbs, reps, achieved_at FROM personal_records WHERE user_id = ? AND exercise_id = ?",
            (user_id, exercise_id),
        ).fetchone()
    return PersonalRecord.model_validate(dict(row)) if row else None


def list_personal_records(user_id: str) -> List[PersonalRecord]:
    with db_conn(settings.app_db_path) as conn:
        rows = conn.execute(
            """
            SELECT exercise_id, max_weight_lbs, reps, achieved_at FROM personal_records
            WHERE user_id = ? ORDER BY achieved_at DESC
            """,
            (user_id,),
        ).fetchall()
    return [PersonalRecord.model_validate(dict(r)) for r in rows]


# ---- Analytics ----


def _sets_since(user_id: str, since: datetime, *, exercise_id: Optional[str] = None) -> List[WorkoutSet]:
    sql = """
        SELECT s.* FROM workout_sets s
        JOIN workout_sessions w ON w.id = s.workout_session_id
        WHERE w.user_id = ? AND w.started_at >= ?
    """
    params: list[Any] = [user_id, _iso(since)]
    if exercise_id:
        sql += " AND s.exercise_id = ?"
        params.append(exercise_id)
    sql += " ORDER BY s.completed_at ASC"
    with db_conn(settings.app_db_path) as conn:
        rows = conn.execute(sql, params).fetchall()
    return [_row_to_set(r) for r in rows]


def weekly_volume(user_id: str, *, now: Optional[datetime] = None) -> Dict[str, Any]:
    """Set counts per muscle-group name over the last seven days."""
    since = (now or _utc_now()) - timedelta(days=7)
    volume: Dict[str, int] = {}
    for s in _sets_since(user_id, since):
        group = get_muscle_group_for(s.exercise_id)
        if group is None:
            continue
        volume[group.name] = volume.get(group.name, 0) + 1
    return {"since": _iso(since), "sets_by_muscle_group": volume}


def progress_data(user_id: str, exercise_id: str, *, days: int = 90, now: Optional[datetime] = None) -> List[WorkoutSet]:
    since = (now or _utc_now()) - timedelta(days=days)
    return _sets_since(user_id, since, exercise_id=exercise_id)


def previous_session_data(user_id: str, exercise_id: str) -> Optional[PreviousSessionData]:
    """Sets from the most recent completed session that included the exercise."""
    with db_conn(settings.app_db_path) as conn:
        sessions = conn.execute(
            """
            SELECT * FROM workout_sessions
            WHERE user_id = ? AND ended_at IS NOT NULL
            ORDER BY started_at DESC LIMIT 20
            """,
            (user_id,),
        ).fetchall()
        for row in sessions:
            sets = conn.execute(
                """
                SELECT * FROM workout_sets
                WHERE workout_session_id = ? AND exercise_id = ?
                ORDER BY set_number ASC
                """,
                (row["id"], exercise_id),
            ).fetchall()
            if sets:
                return PreviousSessionData(
                    exercise_id=exercise_id,
                    session_date=row["ended_at"] or row["started_at"],
                    sets=[_row_to_set(s) for s in sets],
                )
    return None
