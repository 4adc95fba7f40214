"""Categories API (under /api/categories)."""

from fastapi import APIRouter, Depends, HTTPException, status

from registry.db import Database
from registry.deps import get_db
from registry.errors import ConflictError
from registry.models import Category
from registry.schemas.requests import CreateCategoryRequest
from registry.schemas.responses import CategoryItem, ListCategoriesResponse
from registry.services import categories_service

router = APIRouter(prefix="/categories", tags=["Categories"])


def _category_to_item(category: Category) -> CategoryItem:
    return CategoryItem(
        id=str(category.id),
        name=category.name,
        slug=category.slug,
        description=category.description,
        icon=category.icon,
        toolCount=category.tool_count,
        createdAt=category.created_at.isoformat(),
    )


@router.get(
    "",
    summary="List categories",
    description="All categories with tool counts, most populated first.",
    operation_id="listCategories",
    response_model=ListCategoriesResponse,
)
def list_categories(db: Database = Depends(get_db)):
    return ListCategoriesResponse(data=[_category_to_item(c) for c in categories_service.list_categories(db)])


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    summary="Create category",
    operation_id="createCategory",
    response_model=CategoryItem,
)
def create_category(body: CreateCategoryRequest, db: Database = Depends(get_db)):
    try:
        category = categories_service.create_category(
            db, name=body.name, slug=body.slug, description=body.description, icon=body.icon
        )
    except ConflictError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _category_to_item(category)
