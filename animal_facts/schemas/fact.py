from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List, Optional


class Fact(BaseModel):
    """A single animal fact, normalized from whichever upstream produced it."""

    model_config = ConfigDict(frozen=True)

    text: str = Field(..., min_length=1)
    animal: str = Field(..., min_length=1)

    @field_validator("text")
    @classmethod
    def _text_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("fact text is blank")
        return value


# -------------------------------
# Upstream payload shapes
# -------------------------------
class CatFactPayload(BaseModel):
    # {"text": "...", "type": "cat", "_id": ..., ...}
    text: str


class DogFactPayload(BaseModel):
    # {"facts": ["..."], "success": true}
    facts: List[str]
    success: Optional[bool] = None


# -------------------------------
# HTTP bodies
# -------------------------------
class FactResponse(BaseModel):
    fact: str
    animal: str


class ErrorResponse(BaseModel):
    error: str
    animal: Optional[str] = None
    cause: Optional[str] = None
    supported: Optional[List[str]] = None
