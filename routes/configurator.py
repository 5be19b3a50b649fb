"""
Configurator API routes.

Serves the configurator groups of a product page.
"""

from fastapi import APIRouter, Query
from fastapi.responses import JSONResponse
from typing import Optional
import structlog

from config import settings
from models.configurator import ConfiguratorResponse
from models.context import SalesChannelContext
from services.product_service import get_product_service
from services.configurator_service import get_configurator_service
from exceptions import AppError

logger = structlog.get_logger(__name__)

router = APIRouter()


# ===================
# EXCEPTION HANDLER
# ===================

def handle_error(e: Exception) -> JSONResponse:
    """Convert exception to JSON response."""
    if isinstance(e, AppError):
        return JSONResponse(
            status_code=e.status_code,
            content=e.to_dict()
        )
    # Unexpected error
    logger.error("unexpected_error", error=str(e), type=type(e).__name__)
    return JSONResponse(
        status_code=500,
        content={
            "error": {
                "code": "INTERNAL_ERROR",
                "message": "An unexpected error occurred"
            }
        }
    )


# ===================
# ROUTES
# ===================

@router.get("/{product_id}", response_model=ConfiguratorResponse)
async def get_configurator(
    product_id: str,
    sales_channel_id: Optional[str] = Query(None, description="Sales channel, defaults to the configured one"),
    language_id: Optional[str] = Query(None, description="Language of the request")
):
    """
    Get the configurator groups of a product.

    Groups come in display order. Every option carries a combinable flag
    relative to the options of the requested variant. Base products
    return an empty list.

    Raises:
        404: Product not found
        500: Variant selects options its parent does not offer
    """
    try:
        context = SalesChannelContext(
            sales_channel_id=sales_channel_id or settings.default_sales_channel_id,
            language_id=language_id
        )

        product = get_product_service().get_sales_channel_product(product_id)
        groups = get_configurator_service().load(product, context)

        return ConfiguratorResponse(
            data=groups.to_list(),
            total=len(groups)
        )

    except Exception as e:
        return handle_error(e)
