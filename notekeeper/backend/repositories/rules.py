"""
Validation Rules.

Per-field constraints for the note record kind. Each rule takes a raw
value and returns the sanitized value or raises ValidationError. Fields
without a rule are dropped silently.
"""

from collections.abc import Callable, Mapping
from typing import Any

from notekeeper.backend.core.exceptions import ValidationError
from notekeeper.backend.core.sanitize import clean_html, strip_all_tags
from notekeeper.backend.models.note import NOTE_STATUSES, NoteStatus

FieldRule = Callable[[Any], Any]


def _absint(value: Any) -> int:
    """Coerce to a non-negative integer; unparseable values become 0."""
    if isinstance(value, bool) or value is None:
        return 0
    try:
        return abs(int(str(value).strip()) if isinstance(value, str) else int(value))
    except (TypeError, ValueError):
        return 0


def rule_user_id(value: Any) -> int:
    user_id = _absint(value)
    if user_id == 0:
        raise ValidationError(
            "user_id must be a non-zero integer",
            details={"user_id": value},
        )
    return user_id


def rule_title(value: Any) -> str:
    title = strip_all_tags("" if value is None else str(value))
    if not title:
        raise ValidationError("title cannot be empty", details={"title": "empty"})
    return title


def rule_content(value: Any) -> str:
    return clean_html("" if value is None else str(value))


def rule_status(value: Any) -> str:
    if value is None:
        return NoteStatus.DRAFT.value
    status = str(value).strip().lower()
    if status not in NOTE_STATUSES:
        raise ValidationError(
            "invalid status",
            details={"status": value, "allowed": list(NOTE_STATUSES)},
        )
    return status


NOTE_RULES: dict[str, FieldRule] = {
    "user_id": rule_user_id,
    "title": rule_title,
    "content": rule_content,
    "status": rule_status,
}


def sanitize_fields(
    raw: Mapping[str, Any],
    rules: Mapping[str, FieldRule],
    partial: bool = True,
) -> dict[str, Any]:
    """
    Run field rules over raw input.

    Args:
        raw: Raw field name to value mapping
        rules: Rule per recognized field
        partial: When False, every recognized field is validated, with
            missing ones treated as None (create). When True only the
            fields present in `raw` are validated (update).

    Returns:
        Sanitized values for recognized fields only

    Raises:
        ValidationError: If any recognized field fails its rule
    """
    names = [name for name in rules if name in raw] if partial else list(rules)
    return {name: rules[name](raw.get(name)) for name in names}
