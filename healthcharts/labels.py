"""
Axis label formatting module.

Labels are chosen by the number of points on the axis:
- up to 7 points: weekday names
- up to 30 points: "Mon D" every 3rd point, bare day number otherwise
- up to 90 points: "Mon D" every 7th point, blank otherwise
- more: month name every 30th point, blank otherwise
Month starts and both ends of the axis are always marked.
"""

from datetime import date

WEEKDAY_ABBR = ('Mon', 'Tue', 'Wed', 'Thu', 'Fri', 'Sat', 'Sun')
WEEKDAY_NAMES = ('Monday', 'Tuesday', 'Wednesday', 'Thursday', 'Friday', 'Saturday', 'Sunday')
MONTH_ABBR = ('Jan', 'Feb', 'Mar', 'Apr', 'May', 'Jun',
              'Jul', 'Aug', 'Sep', 'Oct', 'Nov', 'Dec')
MONTH_NAMES = ('January', 'February', 'March', 'April', 'May', 'June', 'July',
               'August', 'September', 'October', 'November', 'December')

# (max points, marker modulus) per tier above the weekday tier
WEEK_TIER_MAX = 7
DAY_TIER = (30, 3)
QUARTER_TIER = (90, 7)
YEAR_MODULUS = 30


def _is_marked(day: date, index: int, total: int, modulus: int) -> bool:
    return day.day == 1 or index % modulus == 0 or index == 0 or index == total - 1


def format_label(day: date, index: int, total: int) -> str:
    """Axis label for the point at `index` on an axis of `total` points."""
    month = MONTH_ABBR[day.month - 1]

    if total <= WEEK_TIER_MAX:
        return WEEKDAY_ABBR[day.weekday()]

    if total <= DAY_TIER[0]:
        if _is_marked(day, index, total, DAY_TIER[1]):
            return f"{month} {day.day}"
        return str(day.day)

    if total <= QUARTER_TIER[0]:
        if _is_marked(day, index, total, QUARTER_TIER[1]):
            return f"{month} {day.day}"
        return ''

    if _is_marked(day, index, total, YEAR_MODULUS):
        return month
    return ''


def format_labels(dates) -> list[str]:
    """One axis label per date, same length and order as the input."""
    dates = list(dates)
    total = len(dates)
    return [format_label(day, index, total) for index, day in enumerate(dates)]


def format_tooltip_label(day: date) -> str:
    """Long hover label, e.g. 'Wednesday, January 1, 2025'."""
    return (
        f"{WEEKDAY_NAMES[day.weekday()]}, "
        f"{MONTH_NAMES[day.month - 1]} {day.day}, {day.year}"
    )


def tick_count(total: int) -> int:
    """Suggested maximum number of x-axis ticks for `total` points."""
    if total <= WEEK_TIER_MAX:
        return total
    if total <= DAY_TIER[0]:
        return 8
    if total <= QUARTER_TIER[0]:
        return 10
    return 12
