"""
Document Types Router

CRUD operations for tenant-defined document types and their form schemas.
Every route is confined to the caller's organization.
"""

from uuid import UUID

from fastapi import APIRouter, Query, status

from cms.core.auth import Context
from cms.models.contracts.contents import ContentList
from cms.models.contracts.document_types import (
    DocumentTypeCreate,
    DocumentTypeList,
    DocumentTypePublic,
    DocumentTypeUpdate,
    SlugSuggestion,
)
from cms.services.document_types import DocumentTypeService


router = APIRouter(prefix="/api/document-types", tags=["Document Types"])


@router.post(
    "",
    response_model=DocumentTypePublic,
    status_code=status.HTTP_201_CREATED,
    summary="Create a document type",
    description="Create a document type; title and slug must be unused in the organization",
)
async def create_document_type(
    request: DocumentTypeCreate,
    ctx: Context,
) -> DocumentTypePublic:
    service = DocumentTypeService(ctx.db, ctx.org_id)
    return await service.create(request, ctx.user_id)


@router.get(
    "",
    response_model=DocumentTypeList,
    summary="List document types",
)
async def list_document_types(
    ctx: Context,
    page: int = Query(default=1),
    limit: int | None = Query(default=None),
    search: str | None = Query(default=None),
    is_active: bool | None = Query(default=None, alias="isActive"),
) -> DocumentTypeList:
    """List document types, newest first. Page and limit are clamped, not rejected."""
    service = DocumentTypeService(ctx.db, ctx.org_id)
    return await service.list(page=page, limit=limit, search=search, is_active=is_active)


# Literal paths are registered before /{document_type_id} so they are not
# parsed as ids.
@router.get(
    "/slug-suggestion",
    response_model=SlugSuggestion,
    summary="Suggest a free slug",
)
async def suggest_document_type_slug(
    ctx: Context,
    title: str = Query(..., min_length=1),
    slug: str | None = Query(default=None),
) -> SlugSuggestion:
    service = DocumentTypeService(ctx.db, ctx.org_id)
    return await service.suggest_slug(title, slug)


@router.get(
    "/slug/{slug}",
    response_model=DocumentTypePublic,
    summary="Get an active document type by slug",
)
async def get_document_type_by_slug(slug: str, ctx: Context) -> DocumentTypePublic:
    service = DocumentTypeService(ctx.db, ctx.org_id)
    return await service.get_by_slug(slug)


@router.get(
    "/{document_type_id}",
    response_model=DocumentTypePublic,
    summary="Get a document type",
    description="Get a document type with its five most recent documents",
)
async def get_document_type(document_type_id: UUID, ctx: Context) -> DocumentTypePublic:
    service = DocumentTypeService(ctx.db, ctx.org_id)
    return await service.get(document_type_id)


@router.patch(
    "/{document_type_id}",
    response_model=DocumentTypePublic,
    summary="Update a document type",
)
async def update_document_type(
    document_type_id: UUID,
    request: DocumentTypeUpdate,
    ctx: Context,
) -> DocumentTypePublic:
    service = DocumentTypeService(ctx.db, ctx.org_id)
    return await service.update(document_type_id, request, ctx.user_id)


@router.delete(
    "/{document_type_id}",
    response_model=DocumentTypePublic,
    summary="Delete a document type",
    description="Soft delete (isActive=false); refused while documents reference the type",
)
async def delete_document_type(document_type_id: UUID, ctx: Context) -> DocumentTypePublic:
    service = DocumentTypeService(ctx.db, ctx.org_id)
    return await service.remove(document_type_id)


@router.patch(
    "/{document_type_id}/toggle-active",
    response_model=DocumentTypePublic,
    summary="Toggle a document type's active flag",
)
async def toggle_document_type_active(
    document_type_id: UUID,
    ctx: Context,
) -> DocumentTypePublic:
    service = DocumentTypeService(ctx.db, ctx.org_id)
    return await service.toggle_active(document_type_id, ctx.user_id)


@router.get(
    "/{document_type_id}/documents",
    response_model=ContentList,
    summary="List documents of a document type",
)
async def list_document_type_documents(
    document_type_id: UUID,
    ctx: Context,
    page: int = Query(default=1),
    limit: int | None = Query(default=None),
) -> ContentList:
    service = DocumentTypeService(ctx.db, ctx.org_id)
    return await service.list_documents(document_type_id, page=page, limit=limit)
