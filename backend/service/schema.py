"""
Request and response models for the HTTP API.

Field names are snake_case in Python and camelCase on the wire.
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from converter import UnknownLanguageError, get_language

from .config import get_settings


class SkillLevel(str, Enum):
    """Audience the explanation is written for"""
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ConvertCodeRequest(CamelModel):
    """Body of POST /api/convert"""
    source_code: str
    source_language: str
    target_language: str
    skill_level: Optional[SkillLevel] = None

    @field_validator("source_code")
    @classmethod
    def source_code_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Source code is required")
        limit = get_settings().MAX_SOURCE_LENGTH
        if len(value) > limit:
            raise ValueError(f"Source code is longer than {limit} characters")
        return value

    @field_validator("source_language", "target_language")
    @classmethod
    def language_is_known(cls, value: str) -> str:
        try:
            get_language(value)
        except UnknownLanguageError as e:
            raise ValueError(e.message) from e
        return value


class ConversionStep(CamelModel):
    title: str
    source_code: str
    target_code: str
    explanation: str


class Explanation(CamelModel):
    step_by_step: List[ConversionStep]
    high_level: str
    language_differences: str


class ConvertCodeResponse(CamelModel):
    """Result of a conversion, with the id of its history record"""
    id: int
    target_code: str
    explanation: Explanation


class ConversionRecord(CamelModel):
    """One stored conversion; `explanation` holds the serialised explanation"""
    id: int
    source_code: str
    target_code: str
    source_language: str
    target_language: str
    explanation: str
    created_at: str = Field(..., description="ISO-8601 creation time")


class LanguageInfo(CamelModel):
    id: str
    display_name: str
    supported: bool
