"""
Shopping list routes for the FastAPI application.

Provides endpoints for:
- Consolidating a list of recipe texts into a shopping list
- Consolidating the recipes section of a whole generated meal plan

Handlers are plain functions: the engine is synchronous and FastAPI runs
them in its threadpool.
"""
import logging
from functools import lru_cache
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from grocery.config import Settings
from grocery.data.models import ConsolidationResult
from grocery.shopping.engine import ShoppingListBuilder
from grocery.shopping.formatter import render_text

logger = logging.getLogger(__name__)

router = APIRouter()


class ShoppingListOptions(BaseModel):
    """Per-request overrides of the configured engine options."""
    on_hand: str = ""
    convert_units: Optional[bool] = None
    fold_cuts: Optional[bool] = None


class CreateShoppingListRequest(ShoppingListOptions):
    """Request body for consolidating recipe texts."""
    recipes: List[str] = Field(default_factory=list)


class PlanShoppingListRequest(ShoppingListOptions):
    """Request body for consolidating a whole generated meal plan."""
    plan_text: str


class ShoppingSectionModel(BaseModel):
    """One category of the shopping list."""
    category: str
    items: List[str]


class ShoppingListResponse(BaseModel):
    """Response from the shopping list endpoints."""
    success: bool
    empty: bool
    sections: List[ShoppingSectionModel] = Field(default_factory=list)
    text: str = ""


@lru_cache()
def get_settings() -> Settings:
    """Dependency to get the environment settings (read once)."""
    return Settings.from_env()


def _builder(options: ShoppingListOptions, settings: Settings) -> ShoppingListBuilder:
    convert_units = settings.convert_units if options.convert_units is None else options.convert_units
    fold_cuts = settings.fold_cuts if options.fold_cuts is None else options.fold_cuts
    return ShoppingListBuilder(convert_units=convert_units, fold_cuts=fold_cuts)


def _to_response(result: ConsolidationResult) -> ShoppingListResponse:
    shopping_list = result.shopping_list
    return ShoppingListResponse(
        success=True,
        empty=shopping_list.is_empty,
        sections=[
            ShoppingSectionModel(category=label, items=items)
            for label, items in shopping_list
        ],
        text=render_text(shopping_list),
    )


@router.post("/shopping-list", response_model=ShoppingListResponse)
def create_shopping_list(
    shop_request: CreateShoppingListRequest,
    settings: Settings = Depends(get_settings),
):
    """
    Create a consolidated shopping list from recipe texts.

    Args:
        shop_request: Recipe texts, on-hand inventory and engine options

    Returns:
        ShoppingListResponse with categorized items and rendered text.
        A request with no usable ingredients returns empty=True.
    """
    try:
        builder = _builder(shop_request, settings)
        result = builder.build(shop_request.recipes, shop_request.on_hand)
        logger.info(f"Shopping list request: {result.stats}")
        return _to_response(result)

    except Exception as e:
        logger.exception(f"Error creating shopping list: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/shopping-list/from-plan", response_model=ShoppingListResponse)
def create_shopping_list_from_plan(
    plan_request: PlanShoppingListRequest,
    settings: Settings = Depends(get_settings),
):
    """
    Create a shopping list from a whole generated meal plan.

    The plan is split into its Meal Plan / Recipes / Shopping List parts and
    only the recipes are consolidated.
    """
    try:
        builder = _builder(plan_request, settings)
        result = builder.build_from_plan(plan_request.plan_text, plan_request.on_hand)
        logger.info(f"Meal plan shopping list request: {result.stats}")
        return _to_response(result)

    except Exception as e:
        logger.exception(f"Error creating shopping list from meal plan: {e}")
        raise HTTPException(status_code=500, detail=str(e))
