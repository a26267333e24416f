"""Date display helpers shared by the executor and list summaries."""

from __future__ import annotations

from datetime import date, timedelta
from typing import Optional


    # WHAT: render an ISO due date the way the board cards do ("Today", "Friday", "Oct 27").
    # WHY: chat confirmations should read like the UI instead of echoing raw ISO strings.
    # HOW: compare against ``reference`` for today/tomorrow, then a Sunday-start week window, then month/day.
def format_smart_date(value: Optional[str], reference: Optional[date] = None) -> str:

    if not value:
        return ""
    try:
        parsed = date.fromisoformat(value[:10])
    except ValueError:
        return ""
    reference = reference or date.today()
    if parsed == reference:
        return "Today"
    if parsed == reference + timedelta(days=1):
        return "Tomorrow"
    week_start = reference - timedelta(days=(reference.weekday() + 1) % 7)
    if week_start <= parsed < week_start + timedelta(days=7):
        return parsed.strftime("%A")
    return f"{parsed.strftime('%b')} {parsed.day}"


__all__ = ["format_smart_date"]
