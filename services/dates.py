from datetime import date, datetime
from typing import Union


def to_date_input(value: Union[date, datetime, str, None]) -> str:
    """
    Format a date for an HTML <input type="date"> ('YYYY-MM-DD').

    Returns "" when there is no date so the field renders empty.
    """
    if value is None:
        return ""
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    value = value.strip()
    if not value:
        return ""
    return datetime.fromisoformat(value.replace("Z", "+00:00")).date().isoformat()
