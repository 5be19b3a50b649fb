"""
Available combination service.

Collects the option id combinations of all active variants of a parent
product. The result answers membership queries for the configurator:
does a set of option ids form a variant, and does an option occur in
any variant at all.
"""

from typing import Iterable, Optional
import structlog

from config import get_supabase_client, settings
from models.context import SalesChannelContext
from exceptions import DatabaseError

logger = structlog.get_logger(__name__)


class AvailableCombinationResult:
    """
    Option id combinations of the existing variants of one product.

    Combinations are order independent: {Red, S} and {S, Red} are the
    same variant.
    """

    def __init__(self):
        self._combinations: dict[frozenset[str], bool] = {}
        self._option_ids: set[str] = set()

    def add_combination(self, option_ids: Iterable[str], available: bool = True) -> None:
        """Register the option ids of one variant."""
        key = frozenset(option_ids)
        if not key:
            return
        # Two variants with the same options: available if either is
        self._combinations[key] = self._combinations.get(key, False) or available
        self._option_ids.update(key)

    def has_combination(self, option_ids: Iterable[str]) -> bool:
        """Check whether exactly these option ids form a variant."""
        return frozenset(option_ids) in self._combinations

    def has_option_id(self, option_id: str) -> bool:
        """Check whether an option id occurs in any variant."""
        return option_id in self._option_ids

    def is_available(self, option_ids: Iterable[str]) -> bool:
        """Check whether the variant for these option ids can be bought."""
        return self._combinations.get(frozenset(option_ids), False)

    def get_combinations(self) -> list[frozenset[str]]:
        return list(self._combinations)

    def __len__(self) -> int:
        return len(self._combinations)


class CombinationService:
    """
    Builds AvailableCombinationResult objects from the product table.

    A variant takes part when it is active and carries option ids.
    A variant without its own active flag inherits the parent's.
    """

    def __init__(self):
        self.db = get_supabase_client()
        self.table = settings.product_table

    def load(
        self,
        product_id: str,
        context: SalesChannelContext
    ) -> AvailableCombinationResult:
        """
        Load the combinations of all variants of a parent product.

        Args:
            product_id: Parent product UUID
            context: Sales channel context of the request

        Returns:
            AvailableCombinationResult, empty when the product has no variants

        Raises:
            DatabaseError: If a query fails
        """
        logger.debug(
            "loading_combinations",
            product_id=product_id,
            sales_channel_id=context.sales_channel_id
        )

        try:
            parent = (
                self.db.table(self.table)
                .select("id, active")
                .eq("id", product_id)
                .execute()
            )
            variants = (
                self.db.table(self.table)
                .select("id, option_ids, active, available")
                .eq("parent_id", product_id)
                .execute()
            )
        except Exception as e:
            logger.error(
                "load_combinations_failed",
                product_id=product_id,
                error=str(e)
            )
            raise DatabaseError("select", str(e))

        parent_active = bool(parent.data and parent.data[0].get("active"))

        result = AvailableCombinationResult()
        skipped = 0

        for row in variants.data:
            active = row.get("active")
            if active is None:
                active = parent_active

            option_ids = row.get("option_ids")
            if not active or not option_ids:
                skipped += 1
                continue

            available = row.get("available")
            result.add_combination(
                option_ids,
                available=True if available is None else bool(available)
            )

        logger.debug(
            "combinations_loaded",
            product_id=product_id,
            combinations=len(result),
            skipped=skipped
        )

        return result


# Singleton instance for convenience
_combination_service: Optional[CombinationService] = None

def get_combination_service() -> CombinationService:
    """Get or create CombinationService instance."""
    global _combination_service
    if _combination_service is None:
        _combination_service = CombinationService()
    return _combination_service
