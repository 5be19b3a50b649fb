"""
Product service for storefront product lookups.

Variants inherit the configurator group order of their parent
when they do not define one themselves.
"""

from typing import Optional
import structlog

from config import get_supabase_client, settings
from models.product import SalesChannelProduct
from exceptions import (
    ProductNotFoundError,
    DatabaseError
)

logger = structlog.get_logger(__name__)

PRODUCT_COLUMNS = "id, parent_id, product_number, option_ids, configurator_group_config, active"


class ProductService:
    """
    Product read access for the storefront.
    """

    def __init__(self):
        self.db = get_supabase_client()
        self.table = settings.product_table

    # ===================
    # READ OPERATIONS
    # ===================

    def get_by_id(self, product_id: str) -> Optional[SalesChannelProduct]:
        """
        Get a single product row by ID.

        Args:
            product_id: Product UUID

        Returns:
            SalesChannelProduct or None if not found
        """
        logger.debug("getting_product", product_id=product_id)

        try:
            result = (
                self.db.table(self.table)
                .select(PRODUCT_COLUMNS)
                .eq("id", product_id)
                .execute()
            )

            if not result.data:
                return None

            return SalesChannelProduct(**result.data[0])

        except Exception as e:
            logger.error(
                "get_product_failed",
                product_id=product_id,
                error=str(e)
            )
            raise DatabaseError("select", str(e))

    def get_sales_channel_product(self, product_id: str) -> SalesChannelProduct:
        """
        Get a product with inherited fields resolved.

        A variant without its own configurator_group_config takes the
        parent's.

        Args:
            product_id: Product UUID

        Returns:
            SalesChannelProduct

        Raises:
            ProductNotFoundError: If product doesn't exist
        """
        product = self.get_by_id(product_id)
        if product is None:
            raise ProductNotFoundError(product_id)

        if product.parent_id and product.configurator_group_config is None:
            parent = self.get_by_id(product.parent_id)
            if parent is None:
                logger.warning(
                    "parent_product_missing",
                    product_id=product_id,
                    parent_id=product.parent_id
                )
            else:
                product.configurator_group_config = parent.configurator_group_config

        return product


# Singleton instance for convenience
_product_service: Optional[ProductService] = None

def get_product_service() -> ProductService:
    """Get or create ProductService instance."""
    global _product_service
    if _product_service is None:
        _product_service = ProductService()
    return _product_service
