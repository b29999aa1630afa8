from __future__ import annotations

from typing import Any

from pydantic import ConfigDict, StrictStr

from app.schemas.common import APIModel


class ExtractRequest(APIModel):
    # Unknown top-level keys are dropped rather than rejected.
    model_config = ConfigDict(extra="ignore")

    input: StrictStr
    # Loose schema description; its own shape is checked by the translator,
    # not here.
    format: dict[str, Any]


class ExtractErrorResponse(APIModel):
    detail: str
    kind: str | None = None
