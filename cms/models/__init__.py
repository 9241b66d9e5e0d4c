"""
CMS Models

ORM models (database tables):
    from cms.models.orm import DocumentType, Content

Pydantic contracts (API request/response):
    from cms.models.contracts import DocumentTypeCreate, DocumentTypePublic

Enums:
    from cms.models.enums import FieldType, ContentStatus
"""
