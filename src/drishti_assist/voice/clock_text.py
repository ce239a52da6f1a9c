"""
Spoken time and greeting text.
"""

from datetime import datetime

from ..vocabulary import get_vocabulary


def salutation_key(hour: int) -> str:
    """Time-of-day bucket: before noon, before 17:00, evening."""
    if hour < 12:
        return "morning"
    if hour < 17:
        return "afternoon"
    return "evening"


def format_spoken_time(moment: datetime, locale: str) -> str:
    """
    Format a wall-clock time as a spoken sentence on a 12-hour clock.

    English reads "The time is 2:05 PM"; Hindi reads "अभी 2 बजकर 05 मिनट हुए हैं".
    """
    vocab = get_vocabulary(locale)
    hour = moment.hour % 12 or 12
    meridiem = "AM" if moment.hour < 12 else "PM"
    return vocab.time_template.format(hour=hour, minute=moment.minute, meridiem=meridiem)


def greeting_text(moment: datetime, locale: str) -> str:
    vocab = get_vocabulary(locale)
    salutation = vocab.salutations[salutation_key(moment.hour)]
    return f"{salutation}. {vocab.greeting}"
