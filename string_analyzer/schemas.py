from pydantic import BaseModel, ConfigDict, Field, field_serializer
from typing import Any, Dict, List
from datetime import datetime, timezone


class StringCreate(BaseModel):
    # typed loosely so the service can tell a missing value from a non-string one
    value: Any = Field(None, description="String to analyze")


class StringProperties(BaseModel):
    model_config = ConfigDict(frozen=True)

    length: int
    is_palindrome: bool
    unique_characters: int
    word_count: int
    content_hash: str
    character_frequency_map: Dict[str, int]


class StringResponse(BaseModel):
    id: str
    value: str
    properties: StringProperties
    created_at: datetime

    @field_serializer("created_at")
    def serialize_created_at(self, created_at: datetime) -> str:
        # SQLite hands back naive datetimes; everything is stored as UTC
        if created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=timezone.utc)
        return created_at.isoformat()

    @classmethod
    def from_record(cls, record) -> "StringResponse":
        return cls(
            id=record.id,
            value=record.value,
            properties=StringProperties(
                length=record.length,
                is_palindrome=record.is_palindrome,
                unique_characters=record.unique_characters,
                word_count=record.word_count,
                content_hash=record.content_hash,
                character_frequency_map=record.character_frequency_map,
            ),
            created_at=record.created_at,
        )


class StringListResponse(BaseModel):
    data: List[StringResponse]
    count: int
    filters_applied: Dict[str, Any]


class InterpretedQuery(BaseModel):
    original: str
    parsed_filters: Dict[str, Any]


class NaturalLanguageResponse(BaseModel):
    data: List[StringResponse]
    count: int
    interpreted_query: InterpretedQuery
