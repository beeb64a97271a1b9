from __future__ import annotations

import json
import re
from dataclasses import dataclass

from pydantic import BaseModel, Field, ValidationError

from app.fsm.states import Intent

_CODE_FENCE = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL | re.IGNORECASE)


class IntentClassification(BaseModel):
    intencao: Intent
    confianca: float = Field(..., ge=0.0, le=1.0)


@dataclass
class ClassificationDecode:
    status: str  # ok / error
    classification: IntentClassification | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.status == "ok"


def _strip_code_fence(text: str) -> str:
    match = _CODE_FENCE.match(text.strip())
    return match.group(1) if match else text.strip()


def decode_classification(raw: str | None) -> ClassificationDecode:
    if not raw or not raw.strip():
        return ClassificationDecode(status="error", error="empty_response")

    try:
        data = json.loads(_strip_code_fence(raw))
    except json.JSONDecodeError as exc:
        return ClassificationDecode(status="error", error=f"invalid_json: {exc}")

    if not isinstance(data, dict):
        return ClassificationDecode(status="error", error="not_an_object")

    try:
        parsed = IntentClassification.model_validate(data)
    except ValidationError as exc:
        return ClassificationDecode(status="error", error=f"validation_error: {exc}")

    return ClassificationDecode(status="ok", classification=parsed)
