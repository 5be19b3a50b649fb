"""
Request context handed through to the catalog collaborators.
"""

from pydantic import Field
from typing import Optional

from models.base import BaseSchema


class SalesChannelContext(BaseSchema):
    """Sales channel and language a storefront request is served for."""

    sales_channel_id: str = Field(..., min_length=1, description="Sales channel id")
    language_id: Optional[str] = Field(None, description="Language id")
