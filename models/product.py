"""
Product schemas for the storefront configurator.

A variant points at its parent through parent_id. The parent owns the
configurator settings; variants own their selected option ids.
"""

from pydantic import Field, field_validator
from typing import Optional

from models.base import BaseSchema


class ConfiguratorGroupConfig(BaseSchema):
    """
    One entry of the merchant-defined group order.

    Only the id takes part in ordering. The other fields are stored
    alongside it and passed through untouched.
    """

    id: str = Field(..., description="Property group UUID")
    representation: str = Field(
        default="box",
        description="How the storefront renders the group (box, select, ...)"
    )
    expression_for_listings: bool = Field(
        default=False,
        description="Whether variants of this group are expanded in listings"
    )


class SalesChannelProduct(BaseSchema):
    """
    Product as seen by a sales channel.

    Base products have no parent_id. Variants carry the option ids that
    make up their combination.
    """

    id: str = Field(..., description="Product UUID")
    parent_id: Optional[str] = Field(None, description="Parent product UUID, None for base products")
    product_number: Optional[str] = Field(None, description="Merchant product number")
    option_ids: list[str] = Field(
        default_factory=list,
        description="Option ids selected by this variant"
    )
    configurator_group_config: Optional[list[ConfiguratorGroupConfig]] = Field(
        None,
        description="Preferred group order, None when not configured"
    )
    active: Optional[bool] = Field(None, description="Active flag, None inherits from parent")

    @field_validator("option_ids", mode="before")
    @classmethod
    def option_ids_default(cls, v):
        """Stored NULL means no options."""
        return v or []

    @property
    def is_variant(self) -> bool:
        return bool(self.parent_id)

    @property
    def group_sorting(self) -> list[str]:
        """Group ids of the preferred order, empty when not configured."""
        return [entry.id for entry in self.configurator_group_config or []]
