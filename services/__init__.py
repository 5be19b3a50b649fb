"""
Business logic services.

Each service handles one domain area.
"""

from services.product_service import ProductService, get_product_service
from services.configurator_setting_service import (
    ConfiguratorSettingService,
    get_configurator_setting_service,
)
from services.combination_service import (
    AvailableCombinationResult,
    CombinationService,
    get_combination_service,
)
from services.configurator_service import ConfiguratorService, get_configurator_service

__all__ = [
    "ProductService",
    "get_product_service",
    "ConfiguratorSettingService",
    "get_configurator_setting_service",
    "AvailableCombinationResult",
    "CombinationService",
    "get_combination_service",
    "ConfiguratorService",
    "get_configurator_service",
]
