"""
Pydantic contracts (API request/response models).
"""

from cms.models.contracts.common import OrganizationRef, PaginationMeta, TaxonomyRef
from cms.models.contracts.contents import ContentCreate, ContentList, ContentPublic, ContentUpdate
from cms.models.contracts.document_types import (
    DocumentSummary,
    DocumentTypeCreate,
    DocumentTypeList,
    DocumentTypePublic,
    DocumentTypeUpdate,
    SlugSuggestion,
)
from cms.models.contracts.form_schema import (
    FIELD_TYPE_CHOICES,
    CheckboxField,
    DateField,
    EmailField,
    FieldDefinition,
    FieldValidation,
    FormSchema,
    NumberField,
    SelectField,
    TextareaField,
    TextField,
    create_empty_field,
    field_definition_adapter,
)

__all__ = [
    "OrganizationRef",
    "PaginationMeta",
    "TaxonomyRef",
    "ContentCreate",
    "ContentList",
    "ContentPublic",
    "ContentUpdate",
    "DocumentSummary",
    "DocumentTypeCreate",
    "DocumentTypeList",
    "DocumentTypePublic",
    "DocumentTypeUpdate",
    "SlugSuggestion",
    "FIELD_TYPE_CHOICES",
    "CheckboxField",
    "DateField",
    "EmailField",
    "FieldDefinition",
    "FieldValidation",
    "FormSchema",
    "NumberField",
    "SelectField",
    "TextareaField",
    "TextField",
    "create_empty_field",
    "field_definition_adapter",
]
