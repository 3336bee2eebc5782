"""
Domain Rules — Letters

Pure functions that normalise and validate raw request values before they
reach the persistence layer. Nothing here touches the database, so every
rule can be exercised without a transaction.
"""

from letters.domain.exceptions import ValidationError

MIN_CONTENT_LENGTH = 10

TOO_SHORT_MESSAGE = (
    "Please share at least 10 characters so the Tree Hole can hear you."
)
INVALID_LIMIT_MESSAGE = "Daily limit must be a positive whole number."
INVALID_ID_MESSAGE = "Invalid letter id"


def parse_positive_int(value):
    """
    Returns ``value`` as a positive int, or None when it is not one.

    Accepts ints, integral floats and strings of decimal digits (surrounding
    whitespace ignored). Booleans are rejected even though they are ints.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        number = value
    elif isinstance(value, float):
        if not value.is_integer():
            return None
        number = int(value)
    elif isinstance(value, str):
        text = value.strip()
        if not text.isdecimal():
            return None
        try:
            number = int(text)
        except ValueError:
            # Longer than the interpreter allows for str -> int.
            return None
    else:
        return None
    return number if number > 0 else None


def normalize_content(content):
    """Trims letter content and enforces the minimum length."""
    if not isinstance(content, str):
        raise ValidationError(TOO_SHORT_MESSAGE)
    text = content.strip()
    if len(text) < MIN_CONTENT_LENGTH:
        raise ValidationError(TOO_SHORT_MESSAGE)
    return text


def normalize_reply(reply_text):
    """
    Maps raw reply input to the stored reply text.

    Returns None (meaning "clear the reply") for missing, empty or
    whitespace-only input.
    """
    if reply_text is None:
        return None
    if not isinstance(reply_text, str):
        raise ValidationError("Reply text must be a string.")
    text = reply_text.strip()
    return text or None


def parse_letter_id(value):
    letter_id = parse_positive_int(value)
    if letter_id is None or isinstance(value, float):
        raise ValidationError(INVALID_ID_MESSAGE)
    return letter_id


def parse_daily_limit(value):
    limit = parse_positive_int(value)
    if limit is None:
        raise ValidationError(INVALID_LIMIT_MESSAGE)
    return limit
