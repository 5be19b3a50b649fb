"""
Configurator setting service.

Reads the configurator settings of a parent product together with the
embedded option and group of each setting.
"""

from typing import Optional
import structlog

from config import get_supabase_client, settings
from models.configurator import ConfiguratorSettingRow
from models.context import SalesChannelContext
from exceptions import DatabaseError

logger = structlog.get_logger(__name__)

# Embeds option and option.group through the foreign keys of the settings table
SETTING_COLUMNS = (
    "id, product_id, option_id, position, "
    "option:property_group_option("
    "id, group_id, name, "
    "group:property_group(id, name, display_type, position)"
    ")"
)


class ConfiguratorSettingService:
    """
    Configurator settings data access.

    Settings belong to parent products. Variants never own settings.
    """

    def __init__(self):
        self.db = get_supabase_client()
        self.table = settings.configurator_setting_table

    def load_settings(
        self,
        product_id: str,
        context: SalesChannelContext
    ) -> list[ConfiguratorSettingRow]:
        """
        Get all configurator settings of a product.

        Args:
            product_id: Parent product UUID
            context: Sales channel context of the request

        Returns:
            Setting rows ordered by position, empty when none exist

        Raises:
            DatabaseError: If the query fails
        """
        logger.debug(
            "loading_configurator_settings",
            product_id=product_id,
            sales_channel_id=context.sales_channel_id
        )

        try:
            result = (
                self.db.table(self.table)
                .select(SETTING_COLUMNS)
                .eq("product_id", product_id)
                .order("position")
                .execute()
            )

            rows = [ConfiguratorSettingRow(**row) for row in result.data]

            logger.debug(
                "configurator_settings_loaded",
                product_id=product_id,
                count=len(rows)
            )

            return rows

        except Exception as e:
            logger.error(
                "load_configurator_settings_failed",
                product_id=product_id,
                error=str(e)
            )
            raise DatabaseError("select", str(e))


# Singleton instance for convenience
_configurator_setting_service: Optional[ConfiguratorSettingService] = None

def get_configurator_setting_service() -> ConfiguratorSettingService:
    """Get or create ConfiguratorSettingService instance."""
    global _configurator_setting_service
    if _configurator_setting_service is None:
        _configurator_setting_service = ConfiguratorSettingService()
    return _configurator_setting_service
