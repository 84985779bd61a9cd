from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel, field_validator


def _as_text(value: Any) -> str:
    """Readable text for a scalar or nested JSON value."""
    if isinstance(value, str):
        return value
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False)
    return str(value)


FEEDBACK_FIELDS: tuple[str, ...] = ("spoken", "strengths", "improvements", "suggestion", "overall")


class FeedbackRecord(BaseModel):
    """Five-field structured answer feedback."""
    spoken: str = ""
    strengths: str = ""
    improvements: str = ""
    suggestion: str = ""
    overall: str = ""

    @field_validator(*FEEDBACK_FIELDS, mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str:
        # models occasionally answer with bullet lists instead of prose
        if value is None:
            return ""
        if isinstance(value, list):
            return "\n".join(_as_text(item) for item in value)
        return _as_text(value)

    @classmethod
    def from_raw_text(cls, text: str) -> "FeedbackRecord":
        """Fallback record for a model reply that is not the expected JSON object."""
        return cls(spoken=text, overall=text)

    @classmethod
    def from_legacy(cls, text: str) -> "FeedbackRecord":
        """Plain-text feedback stored by older clients."""
        return cls(overall=text)

    def is_empty(self) -> bool:
        return not any(getattr(self, name) for name in FEEDBACK_FIELDS)


def coerce_feedback(value: Any) -> FeedbackRecord | None:
    """Normalize absent / legacy text / structured feedback to a record or None.

    Args:
        value: stored or submitted feedback value.

    Returns:
        FeedbackRecord | None: None when the feedback is absent or blank.

    Raises:
        pydantic.ValidationError: value is neither text nor a mapping.
    """
    if value is None:
        return None
    if isinstance(value, FeedbackRecord):
        record = value
    elif isinstance(value, str):
        if not value.strip():
            return None
        record = FeedbackRecord.from_legacy(value)
    else:
        record = FeedbackRecord.model_validate(value)
    return None if record.is_empty() else record
