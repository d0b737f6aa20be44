# /edura/services/report_service.py

"""
Manager dashboard reporting: per-class "submitted vs graded" completion.

Only rows inside the manager's scope are counted. Classes come from the
manager's teachers, and only enrollments and submissions of the manager's own
students are considered. Assignments are limited to those created within the
last `months` calendar months, counting the current one.

A submission is on time when its assignment has a due date and it arrived no
later than that date. Every other submission counts as late.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

import pandas as pd

from ..models.manager_model import ClassCompletion, CompletionReport
from .scope_service import ScopeResolver

logger = logging.getLogger(__name__)

DEFAULT_MONTHS = 6
MAX_MONTHS = 12


def _empty_report(months: int) -> CompletionReport:
    return CompletionReport(
        months=months,
        overallCompletionRate=0,
        overallGradedRate=0,
        onTimeRate=0,
        lateRate=0,
        byClass=[],
    )


def _rate(numerator, denominator) -> float:
    return round(float(numerator) / float(denominator) * 100, 2) if denominator else 0.0


def window_start(now: datetime, months: int) -> datetime:
    """First day (UTC) of the month that opens a window of `months` months ending at `now`."""
    month_number = now.year * 12 + (now.month - 1) - (months - 1)
    return datetime(month_number // 12, month_number % 12 + 1, 1, tzinfo=timezone.utc)


def _utc(series: pd.Series) -> pd.Series:
    # Naive timestamps from the store are UTC.
    return pd.to_datetime(series, utc=True)


def build_completion_report(
    manager_id: str,
    resolver: ScopeResolver,
    months: int = DEFAULT_MONTHS,
    now: Optional[datetime] = None,
) -> CompletionReport:
    if not 1 <= months <= MAX_MONTHS:
        raise ValueError(f"months must be between 1 and {MAX_MONTHS}.")
    now = now or datetime.now(timezone.utc)
    db = resolver.db

    teacher_ids = resolver.resolve_teacher_ids(manager_id)
    if not teacher_ids:
        return _empty_report(months)
    classes = db.get_classes_by_teacher_ids(sorted(teacher_ids))
    if not classes:
        return _empty_report(months)

    class_ids = [c.class_id for c in classes]
    student_ids = resolver.resolve_student_ids(manager_id)

    classes_df = pd.DataFrame(
        [{"classId": c.class_id, "className": c.class_name} for c in classes]
    ).set_index("classId")
    enroll_df = pd.DataFrame(
        [{"classId": e.class_id, "studentId": e.student_id}
         for e in db.get_enrollments_by_class_ids(class_ids) if e.student_id in student_ids],
        columns=["classId", "studentId"],
    )
    assign_df = pd.DataFrame(
        [{"assignmentId": a.assignment_id, "classId": a.class_id, "createdAt": a.created_at, "dueDate": a.due_date}
         for a in db.get_assignments_by_class_ids(class_ids)],
        columns=["assignmentId", "classId", "createdAt", "dueDate"],
    )
    assign_df["createdAt"] = _utc(assign_df["createdAt"])
    assign_df["dueDate"] = _utc(assign_df["dueDate"])
    assign_df = assign_df[assign_df["createdAt"] >= window_start(now, months)]

    sub_df = pd.DataFrame(
        [{"assignmentId": s.assignment_id, "studentId": s.student_id, "submittedAt": s.submitted_at, "graded": s.grade is not None}
         for s in db.get_submissions_by_assignment_ids(assign_df["assignmentId"].tolist())],
        columns=["assignmentId", "studentId", "submittedAt", "graded"],
    )
    sub_df["submittedAt"] = _utc(sub_df["submittedAt"])

    # Keep only submissions from students enrolled in the assignment's class.
    sub_df = sub_df.merge(assign_df, on="assignmentId").merge(enroll_df, on=["classId", "studentId"])
    sub_df["onTime"] = sub_df["dueDate"].notna() & (sub_df["submittedAt"] <= sub_df["dueDate"])

    report = classes_df.copy()
    report["assignmentCount"] = assign_df.groupby("classId")["assignmentId"].nunique().reindex(report.index, fill_value=0)
    report["enrolledStudents"] = enroll_df.groupby("classId")["studentId"].nunique().reindex(report.index, fill_value=0)
    report["submitted"] = sub_df.groupby("classId").size().reindex(report.index, fill_value=0)
    report["graded"] = sub_df[sub_df["graded"].astype(bool)].groupby("classId").size().reindex(report.index, fill_value=0)
    report["onTime"] = sub_df[sub_df["onTime"].astype(bool)].groupby("classId").size().reindex(report.index, fill_value=0)
    report["late"] = report["submitted"] - report["onTime"]
    report["expectedSubmissions"] = report["assignmentCount"] * report["enrolledStudents"]

    by_class = [
        ClassCompletion(
            classId=class_id,
            className=row["className"],
            assignmentCount=int(row["assignmentCount"]),
            enrolledStudents=int(row["enrolledStudents"]),
            expectedSubmissions=int(row["expectedSubmissions"]),
            submitted=int(row["submitted"]),
            graded=int(row["graded"]),
            onTime=int(row["onTime"]),
            late=int(row["late"]),
            completionRate=_rate(row["submitted"], row["expectedSubmissions"]),
            gradedRate=_rate(row["graded"], row["submitted"]),
            onTimeRate=_rate(row["onTime"], row["submitted"]),
            lateRate=_rate(row["late"], row["submitted"]),
        )
        for class_id, row in report.sort_values("className").iterrows()
    ]

    total_expected = int(report["expectedSubmissions"].sum())
    total_submitted = int(report["submitted"].sum())
    total_graded = int(report["graded"].sum())
    total_on_time = int(report["onTime"].sum())
    logger.info("Completion report for manager ...%s covers %d classes over %d months", manager_id[-6:], len(by_class), months)

    return CompletionReport(
        months=months,
        overallCompletionRate=_rate(total_submitted, total_expected),
        overallGradedRate=_rate(total_graded, total_submitted),
        onTimeRate=_rate(total_on_time, total_submitted),
        lateRate=_rate(total_submitted - total_on_time, total_submitted),
        byClass=by_class,
    )
