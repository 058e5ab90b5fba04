"""Read-only statistics computed by the database engine.

Each function sends one query (or aggregation pipeline) per figure and
never mutates anything. Datetimes are stored as naive UTC, so day bounds
are converted the same way before they reach a pipeline.
"""

from datetime import datetime, time, timezone

from bson import ObjectId

from ..domain.entities import ClassStatus
from ..infrastructure.db import Store

APPROVED = {"status": ClassStatus.APPROVED.value}


def _first(cursor, field: str) -> int:
    for doc in cursor:
        return doc.get(field) or 0
    return 0


def site_totals(store: Store) -> dict:
    pipeline = [
        {"$match": APPROVED},
        {"$group": {"_id": None, "totalEnrollment": {"$sum": "$totalEnrollment"}}},
    ]
    return {
        "totalUsers": store.users.count_documents({}),
        "totalClasses": store.classes.count_documents(APPROVED),
        # no approved class means no group at all
        "totalEnrollment": _first(store.classes.aggregate(pipeline), "totalEnrollment"),
    }


def popular_classes(store: Store, limit: int = 10) -> list[dict]:
    cursor = store.classes.find(APPROVED).sort([("totalEnrollment", -1), ("_id", 1)]).limit(limit)
    return list(cursor)


def class_totals(store: Store, class_id: ObjectId) -> dict | None:
    klass = store.classes.find_one({"_id": class_id}, {"totalEnrollment": 1})
    if klass is None:
        return None
    key = str(class_id)
    pipeline = [
        {"$match": {"classId": key}},
        {"$group": {"_id": None, "total": {"$sum": "$total_submitted"}}},
    ]
    return {
        "totalEnrollment": klass.get("totalEnrollment", 0),
        "totalAssignments": store.assignments.count_documents({"classId": key}),
        "totalSubmissions": _first(store.assignments.aggregate(pipeline), "total"),
    }


def day_window(now: datetime | None = None) -> tuple[datetime, datetime]:
    """Bounds of the server's current local day as naive UTC datetimes.

    Each bound is localised on its own so the offset is the one in force
    at that moment, which differs from the current one on DST-change days.
    """
    today = (now or datetime.now()).date()
    start = datetime.combine(today, time.min).astimezone()
    end = datetime.combine(today, time(23, 59, 59, 999000)).astimezone()

    def as_utc(moment: datetime) -> datetime:
        return moment.astimezone(timezone.utc).replace(tzinfo=None)

    return as_utc(start), as_utc(end)


def per_day_submissions(store: Store, class_id: str) -> int:
    start, end = day_window()
    window = {"$gte": start, "$lte": end}
    pipeline = [
        {"$match": {"classId": class_id, "submittedEmails": {"$elemMatch": {"date": window}}}},
        {"$unwind": "$submittedEmails"},
        {"$match": {"submittedEmails.date": window}},
        {"$group": {"_id": "$_id", "count": {"$sum": 1}}},
        {"$group": {"_id": None, "total": {"$sum": "$count"}}},
    ]
    return _first(store.assignments.aggregate(pipeline), "total")
