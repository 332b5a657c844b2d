from sqlalchemy import Column, String, Integer, Boolean, DateTime, JSON, Text

from string_analyzer.database import Base


class StringRecord(Base):
    __tablename__ = "string_records"

    # id is the SHA-256 of value, so the primary key also enforces value uniqueness
    id = Column(String(64), primary_key=True)
    value = Column(Text, nullable=False)
    length = Column(Integer, nullable=False, index=True)
    is_palindrome = Column(Boolean, nullable=False, index=True)
    unique_characters = Column(Integer, nullable=False)
    word_count = Column(Integer, nullable=False, index=True)
    character_frequency_map = Column(JSON, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, index=True)

    @property
    def content_hash(self) -> str:
        return self.id

    def __repr__(self):
        return f"<StringRecord {self.id[:12]} value={self.value!r}>"
