"""
Contents Router

CRUD and publishing for contents. Slugs that collide are suffixed rather
than rejected.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, status

from cms.core.auth import Context
from cms.models.contracts.contents import ContentCreate, ContentList, ContentPublic, ContentUpdate
from cms.models.enums import ContentStatus
from cms.services.contents import CategoryCache, ContentService, create_category_cache


router = APIRouter(prefix="/api/contents", tags=["Contents"])


def get_category_cache(request: Request) -> CategoryCache:
    """Return the application's subcategory cache, creating it on first use."""
    cache = getattr(request.app.state, "category_cache", None)
    if cache is None:
        cache = create_category_cache()
        request.app.state.category_cache = cache
    return cache


async def get_content_service(
    ctx: Context,
    cache: Annotated[CategoryCache, Depends(get_category_cache)],
) -> ContentService:
    return ContentService(ctx.db, ctx.org_id, cache)


Service = Annotated[ContentService, Depends(get_content_service)]


@router.post(
    "",
    response_model=ContentPublic,
    status_code=status.HTTP_201_CREATED,
    summary="Create content",
)
async def create_content(
    request: ContentCreate,
    ctx: Context,
    service: Service,
) -> ContentPublic:
    return await service.create(request, ctx.user_id)


@router.get(
    "",
    response_model=ContentList,
    summary="List contents",
)
async def list_contents(
    service: Service,
    page: int = Query(default=1),
    limit: int | None = Query(default=None),
    content_status: ContentStatus | None = Query(default=None, alias="status"),
    document_type_id: UUID | None = Query(default=None, alias="documentTypeId"),
    category_id: UUID | None = Query(default=None, alias="categoryId"),
    tag_id: UUID | None = Query(default=None, alias="tagId"),
    include_subcategories: bool = Query(default=False, alias="includeSubcategories"),
) -> ContentList:
    return await service.list(
        page=page,
        limit=limit,
        status=content_status,
        document_type_id=document_type_id,
        category_id=category_id,
        tag_id=tag_id,
        include_subcategories=include_subcategories,
    )


@router.get(
    "/slug/{slug}",
    response_model=ContentPublic,
    summary="Get content by slug",
)
async def get_content_by_slug(slug: str, service: Service) -> ContentPublic:
    return await service.get_by_slug(slug)


@router.get(
    "/{content_id}",
    response_model=ContentPublic,
    summary="Get content",
)
async def get_content(content_id: UUID, service: Service) -> ContentPublic:
    return await service.get(content_id)


@router.patch(
    "/{content_id}",
    response_model=ContentPublic,
    summary="Update content",
    description="Sending categoryIds or tagIds replaces the whole set",
)
async def update_content(
    content_id: UUID,
    request: ContentUpdate,
    ctx: Context,
    service: Service,
) -> ContentPublic:
    return await service.update(content_id, request, ctx.user_id)


@router.patch(
    "/{content_id}/publish",
    response_model=ContentPublic,
    summary="Publish content",
)
async def publish_content(
    content_id: UUID,
    ctx: Context,
    service: Service,
) -> ContentPublic:
    return await service.publish(content_id, ctx.user_id)


@router.delete(
    "/{content_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete content",
)
async def delete_content(content_id: UUID, service: Service) -> None:
    await service.remove(content_id)
