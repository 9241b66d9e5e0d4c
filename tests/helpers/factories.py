"""
Factory functions for test data.

Plain functions with overrides instead of data-only fixtures, so each test
shows exactly what differs from the defaults.

Usage:
    from tests.helpers.factories import make_field, make_document_type_data

    def test_something():
        field = make_field(name="email", type="email")
"""

from typing import Any
from uuid import UUID

from cms.models.orm import Category, Tag


def make_field(**overrides: Any) -> dict[str, Any]:
    """Build a valid wire-shaped (camelCase) field definition."""
    data: dict[str, Any] = {
        "id": "f1",
        "name": "applicant",
        "type": "text",
        "label": "Applicant",
        "required": True,
    }
    data.update(overrides)
    return data


def make_schema(*fields: dict[str, Any]) -> dict[str, Any]:
    """Wrap field definitions into a form schema payload."""
    return {"fields": list(fields)}


def make_document_type_data(**overrides: Any) -> dict[str, Any]:
    """Build a document type create payload (camelCase, as sent by the admin UI)."""
    data: dict[str, Any] = {
        "title": "Permit",
        "slug": "permit",
        "fields": [make_field()],
    }
    data.update(overrides)
    return data


def make_content_data(**overrides: Any) -> dict[str, Any]:
    """Build a content create payload (camelCase)."""
    data: dict[str, Any] = {
        "title": "Original",
        "slug": "original",
        "content": {"applicant": "Ada"},
    }
    data.update(overrides)
    return data


def make_category(organization_id: UUID, **overrides: Any) -> Category:
    """Build an unsaved Category row."""
    values: dict[str, Any] = {
        "name": "News",
        "slug": "news",
        "color": "#ff0000",
        "organization_id": organization_id,
    }
    values.update(overrides)
    return Category(**values)


def make_tag(organization_id: UUID, **overrides: Any) -> Tag:
    """Build an unsaved Tag row."""
    values: dict[str, Any] = {
        "name": "Featured",
        "slug": "featured",
        "organization_id": organization_id,
    }
    values.update(overrides)
    return Tag(**values)
