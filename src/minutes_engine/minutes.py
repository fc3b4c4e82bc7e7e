"""Bilingual meeting-minutes models and model-output parsing."""

from __future__ import annotations

import json
import re
from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from .prompts import MINUTES_LOCALES

_FENCE_OPEN = re.compile(r"^```(?:json)?[ \t]*\n?", re.IGNORECASE)
_FENCE_CLOSE = re.compile(r"\n?```$")


class MinutesParseError(ValueError):
    """Raised when model output is not a valid bilingual minutes document."""

    def __init__(self, message: str, *, raw_text: str) -> None:
        super().__init__(message)
        self.raw_text = raw_text


class _MinutesModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        # models sometimes emit null for fields or list entries they could not fill
        if isinstance(data, dict):
            return {
                key: [item for item in value if item is not None] if isinstance(value, list) else value
                for key, value in data.items()
                if value is not None
            }
        return data


class DiscussionItem(_MinutesModel):
    topic: str = ""
    content: str = ""


class ActionItem(_MinutesModel):
    task: str = ""
    assignee: str = ""
    due: str = ""


class MeetingMinutes(_MinutesModel):
    title: str = ""
    date: str = ""
    participants: List[str] = Field(default_factory=list)
    summary: str = ""
    discussion: List[DiscussionItem] = Field(default_factory=list)
    decisions: List[str] = Field(default_factory=list)
    action_items: List[ActionItem] = Field(default_factory=list, alias="actionItems")


class MinutesReport(_MinutesModel):
    ko: MeetingMinutes
    en: MeetingMinutes

    def for_locale(self, lang: str) -> MeetingMinutes:
        if lang not in MINUTES_LOCALES:
            raise KeyError(lang)
        return getattr(self, lang)

    def to_json(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


def strip_code_fence(text: str) -> str:
    """Remove a surrounding ```json ... ``` fence if the model added one."""

    cleaned = text.strip()
    cleaned = _FENCE_OPEN.sub("", cleaned, count=1)
    cleaned = _FENCE_CLOSE.sub("", cleaned, count=1)
    return cleaned.strip()


def parse_minutes(text: str) -> MinutesReport:
    cleaned = strip_code_fence(text)
    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as exc:
        raise MinutesParseError(f"model output is not valid JSON: {exc.msg}", raw_text=text) from exc
    try:
        return MinutesReport.model_validate(data)
    except ValidationError as exc:
        raise MinutesParseError("model output does not match the minutes schema", raw_text=text) from exc


__all__ = [
    "ActionItem",
    "DiscussionItem",
    "MeetingMinutes",
    "MinutesParseError",
    "MinutesReport",
    "parse_minutes",
    "strip_code_fence",
]
