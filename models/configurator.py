"""
Configurator schemas: raw setting rows, property groups and options.

Setting rows come from the product_configurator_setting table with the
option and its group embedded. The service turns them into
PropertyGroup / PropertyGroupOption objects held by a
PropertyGroupCollection.
"""

from pydantic import Field, field_validator
from typing import Iterable, Iterator, Optional
from enum import Enum

from models.base import BaseSchema


class Combinability(str, Enum):
    """Outcome of classifying one option against the current selection."""
    COMBINABLE = "COMBINABLE"          # Forms an existing variant with the current picks
    NOT_COMBINABLE = "NOT_COMBINABLE"  # Exists, but not with the current picks
    EXCLUDED = "EXCLUDED"              # Part of no variant at all


# ===================
# RAW ROWS
# ===================

class PropertyGroupRow(BaseSchema):
    """Property group embedded in a setting row."""

    id: str
    name: Optional[str] = None
    display_type: str = "text"
    position: int = 0

    @field_validator("display_type", mode="before")
    @classmethod
    def display_type_default(cls, v):
        return v or "text"

    @field_validator("position", mode="before")
    @classmethod
    def position_default(cls, v):
        return v if v is not None else 0


class PropertyGroupOptionRow(BaseSchema):
    """Property option embedded in a setting row."""

    id: str
    group_id: Optional[str] = None
    name: Optional[str] = None
    group: Optional[PropertyGroupRow] = None


class ConfiguratorSettingRow(BaseSchema):
    """
    One product_configurator_setting row.

    option or option.group may be missing when the catalog is only
    partially populated. Such rows are skipped during assembly.
    """

    id: str = Field(..., description="Setting UUID")
    product_id: str = Field(..., description="Parent product UUID")
    option_id: Optional[str] = Field(None, description="Property option UUID")
    position: int = Field(default=0, description="Position of the option within its group")
    option: Optional[PropertyGroupOptionRow] = None

    @field_validator("position", mode="before")
    @classmethod
    def position_default(cls, v):
        return v if v is not None else 0


# ===================
# ASSEMBLED GROUPS
# ===================

class PropertyGroupOption(BaseSchema):
    """
    Selectable option value.

    combinable is None until classified. Options that belong to no variant
    are removed from their group instead of being flagged.
    """

    id: str = Field(..., description="Option UUID")
    group_id: str = Field(..., description="Owning group UUID")
    name: Optional[str] = Field(None, description="Option name")
    position: int = Field(default=0, description="Configurator setting position")
    configurator_setting_id: Optional[str] = Field(None, description="Setting the option came from")
    combinable: Optional[bool] = Field(None, description="Selectable with the current selection")


class PropertyGroup(BaseSchema):
    """Named set of mutually exclusive options (e.g. Size)."""

    id: str = Field(..., description="Group UUID")
    name: Optional[str] = Field(None, description="Group name")
    display_type: str = Field(default="text", description="Storefront display type")
    position: int = Field(default=0, description="Group position")
    options: Optional[list[PropertyGroupOption]] = Field(
        None,
        description="Options of the group, None when no collection was loaded"
    )

    def has_option(self, option_id: str) -> bool:
        return any(option.id == option_id for option in self.options or [])


class PropertyGroupCollection:
    """
    Property groups keyed by id, iterated in insertion order.

    Lookup by id and iteration in display order are both first class.
    An empty collection is a valid result.
    """

    def __init__(self, groups: Optional[Iterable[PropertyGroup]] = None):
        self._groups: dict[str, PropertyGroup] = {}
        for group in groups or []:
            self.add(group)

    def add(self, group: PropertyGroup) -> None:
        self._groups[group.id] = group

    def get(self, group_id: str) -> Optional[PropertyGroup]:
        return self._groups.get(group_id)

    def has(self, group_id: str) -> bool:
        return group_id in self._groups

    def ids(self) -> list[str]:
        return list(self._groups)

    def option_id_map(self) -> dict[str, str]:
        """Map every option id to the id of its group."""
        return {
            option.id: group.id
            for group in self._groups.values()
            for option in group.options or []
        }

    def to_list(self) -> list[PropertyGroup]:
        return list(self._groups.values())

    def __iter__(self) -> Iterator[PropertyGroup]:
        return iter(list(self._groups.values()))

    def __len__(self) -> int:
        return len(self._groups)

    def __contains__(self, group_id: object) -> bool:
        return group_id in self._groups

    def __repr__(self) -> str:
        return f"PropertyGroupCollection({self.ids()!r})"


# ===================
# API RESPONSES
# ===================

class ConfiguratorResponse(BaseSchema):
    """Ordered configurator groups of a product."""

    data: list[PropertyGroup]
    total: int
