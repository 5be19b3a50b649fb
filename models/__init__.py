"""
Pydantic models for validation and serialization.
"""

from models.base import BaseSchema
from models.context import SalesChannelContext
from models.product import (
    ConfiguratorGroupConfig,
    SalesChannelProduct,
)
from models.configurator import (
    Combinability,
    PropertyGroupRow,
    PropertyGroupOptionRow,
    ConfiguratorSettingRow,
    PropertyGroupOption,
    PropertyGroup,
    PropertyGroupCollection,
    ConfiguratorResponse,
)

__all__ = [
    # Base
    "BaseSchema",

    # Context
    "SalesChannelContext",

    # Product
    "ConfiguratorGroupConfig",
    "SalesChannelProduct",

    # Configurator
    "Combinability",
    "PropertyGroupRow",
    "PropertyGroupOptionRow",
    "ConfiguratorSettingRow",
    "PropertyGroupOption",
    "PropertyGroup",
    "PropertyGroupCollection",
    "ConfiguratorResponse",
]
