"""
Enums shared by ORM models and API contracts.
"""

from enum import Enum


class FieldType(str, Enum):
    """Form field types. Closed set: anything else is rejected."""
    TEXT = "text"
    TEXTAREA = "textarea"
    NUMBER = "number"
    EMAIL = "email"
    DATE = "date"
    CHECKBOX = "checkbox"
    SELECT = "select"


class ContentStatus(str, Enum):
    """Content lifecycle status"""
    DRAFT = "DRAFT"
    PUBLISHED = "PUBLISHED"
    ARCHIVED = "ARCHIVED"
