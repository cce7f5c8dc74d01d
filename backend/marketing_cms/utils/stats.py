from datetime import datetime, timedelta, timezone
from sqlalchemy import func


def count_windows(session, model):
    """
    Row counts for the admin dashboard: overall, today (UTC), last 7 and 30 days.
    """
    now = datetime.now(timezone.utc)
    start_of_day = now.replace(hour=0, minute=0, second=0, microsecond=0)

    def count_since(since=None):
        query = session.query(func.count(model.id))
        if since is not None:
            query = query.filter(model.created_at >= since)
        return query.scalar() or 0

    return {
        "total": count_since(),
        "today": count_since(start_of_day),
        "thisWeek": count_since(now - timedelta(days=7)),
        "thisMonth": count_since(now - timedelta(days=30)),
    }


def count_by(session, column, label=None, *, limit=None, exclude_null=False):
    query = session.query(column, func.count().label("count")).group_by(column)
    if exclude_null:
        query = query.filter(column.isnot(None))
    if limit is not None:
        query = query.order_by(func.count().desc()).limit(limit)
    else:
        query = query.order_by(column)

    key = label or column.key
    return [{key: value, "count": count} for value, count in query.all()]
