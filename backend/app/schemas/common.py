from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class APIModel(BaseModel):
    """
    Common base for API schemas:
    - forbid unknown keys (prevents silent typos in payloads)
    - keep things predictable across endpoints
    """

    model_config = ConfigDict(extra="forbid")
