"""
Product page configurator: core business logic.

Resolves, for a variant and its siblings, which configurator options can
be combined with the options the variant currently has selected.

Steps:
    1. Assemble setting rows into property groups
    2. Order groups by the merchant preference, options by position
    3. Classify every option against the available combinations

Options that occur in no variant are dropped. Groups are always kept,
even when classification leaves them empty.
"""

from typing import Mapping, Optional, Sequence
import structlog

from models.configurator import (
    Combinability,
    ConfiguratorSettingRow,
    PropertyGroup,
    PropertyGroupCollection,
    PropertyGroupOption,
)
from models.context import SalesChannelContext
from models.product import SalesChannelProduct
from services.configurator_setting_service import (
    ConfiguratorSettingService,
    get_configurator_setting_service,
)
from services.combination_service import (
    AvailableCombinationResult,
    CombinationService,
    get_combination_service,
)
from exceptions import InconsistentOptionIdsError

logger = structlog.get_logger(__name__)


class ConfiguratorService:
    """
    Configurator resolution for product pages.

    The settings loader and the combination loader are injected so
    the resolution logic can run against any data source.
    """

    def __init__(
        self,
        setting_service: Optional[ConfiguratorSettingService] = None,
        combination_service: Optional[CombinationService] = None
    ):
        self.setting_service = setting_service or get_configurator_setting_service()
        self.combination_service = combination_service or get_combination_service()

    # ===================
    # ORCHESTRATION
    # ===================

    def load(
        self,
        product: SalesChannelProduct,
        context: SalesChannelContext
    ) -> PropertyGroupCollection:
        """
        Get the ordered, classified configurator groups of a variant.

        Args:
            product: Variant shown on the product page
            context: Sales channel context, passed to the loaders

        Returns:
            PropertyGroupCollection, empty for base products or when the
            parent has no configurator settings

        Raises:
            InconsistentOptionIdsError: If a selected option has no group
            DatabaseError: If a loader query fails
        """
        if not product.parent_id:
            logger.debug("configurator_skipped_base_product", product_id=product.id)
            return PropertyGroupCollection()

        logger.info(
            "loading_configurator",
            product_id=product.id,
            parent_id=product.parent_id,
            sales_channel_id=context.sales_channel_id
        )

        rows = self.setting_service.load_settings(product.parent_id, context)

        groups = self.assemble_groups(rows)
        if not groups:
            logger.info("configurator_empty", parent_id=product.parent_id)
            return groups

        groups = self.sort_groups(groups, product.group_sorting)

        combinations = self.combination_service.load(product.parent_id, context)

        current = self.build_current_options(product, groups)

        self.classify_options(groups, current, combinations)

        logger.info(
            "configurator_loaded",
            product_id=product.id,
            groups=len(groups),
            options=sum(len(group.options or []) for group in groups)
        )

        return groups

    # ===================
    # ASSEMBLY
    # ===================

    def assemble_groups(
        self,
        rows: Sequence[ConfiguratorSettingRow]
    ) -> PropertyGroupCollection:
        """
        Group setting rows by the property group of their option.

        Rows without an option or without a group are skipped. An option
        that appears twice in a group is kept once, with the position of
        its first row.

        Args:
            rows: Setting rows with embedded option and group

        Returns:
            PropertyGroupCollection in discovery order
        """
        groups = PropertyGroupCollection()

        for row in rows:
            option = row.option
            if option is None:
                logger.debug("configurator_setting_skipped", setting_id=row.id, reason="missing_option")
                continue

            group_row = option.group
            if group_row is None:
                logger.debug("configurator_setting_skipped", setting_id=row.id, reason="missing_group")
                continue

            group = groups.get(group_row.id)
            if group is None:
                group = PropertyGroup(
                    id=group_row.id,
                    name=group_row.name,
                    display_type=group_row.display_type,
                    position=group_row.position,
                    options=[]
                )
                groups.add(group)

            if group.has_option(option.id):
                continue

            group.options.append(
                PropertyGroupOption(
                    id=option.id,
                    group_id=group_row.id,
                    name=option.name,
                    position=row.position,
                    configurator_setting_id=row.id
                )
            )

        return groups

    # ===================
    # ORDERING
    # ===================

    def sort_groups(
        self,
        groups: PropertyGroupCollection,
        sorting: Sequence[str]
    ) -> PropertyGroupCollection:
        """
        Order groups by preference and options by position.

        Groups named in sorting come first, in that order. All other
        groups follow in their original order. Options are sorted by
        position; equal positions keep their order.

        Args:
            groups: Assembled groups
            sorting: Preferred group ids

        Returns:
            New PropertyGroupCollection
        """
        sorted_groups = PropertyGroupCollection()

        for group_id in sorting:
            group = groups.get(group_id)
            if group is None or group_id in sorted_groups:
                continue
            sorted_groups.add(group)

        for group in groups:
            if group.id not in sorted_groups:
                sorted_groups.add(group)

        for group in sorted_groups:
            if group.options is None:
                continue
            group.options = sorted(group.options, key=lambda option: option.position)

        return sorted_groups

    # ===================
    # CLASSIFICATION
    # ===================

    def build_current_options(
        self,
        product: SalesChannelProduct,
        groups: PropertyGroupCollection
    ) -> dict[str, str]:
        """
        Map each group to the option the variant has selected in it.

        Raises:
            InconsistentOptionIdsError: If a selected option belongs to
                none of the groups
        """
        key_map = groups.option_id_map()

        unknown = [option_id for option_id in product.option_ids if option_id not in key_map]
        if unknown:
            logger.error(
                "configurator_inconsistent_option_ids",
                product_id=product.id,
                option_ids=unknown
            )
            raise InconsistentOptionIdsError(product.id, unknown)

        return {key_map[option_id]: option_id for option_id in product.option_ids}

    def is_combinable(
        self,
        option: PropertyGroupOption,
        current: Mapping[str, str],
        combinations: AvailableCombinationResult
    ) -> Combinability:
        """
        Classify one option against the current selection.

        The option replaces whatever is selected in its own group. A group
        without a selection simply gains the option.
        """
        candidate = dict(current)
        candidate[option.group_id] = option.id

        # Forms a variant together with the rest of the selection
        if combinations.has_combination(candidate.values()):
            return Combinability.COMBINABLE

        # Exists, only with other picks
        if combinations.has_option_id(option.id):
            return Combinability.NOT_COMBINABLE

        return Combinability.EXCLUDED

    def classify_options(
        self,
        groups: PropertyGroupCollection,
        current: Mapping[str, str],
        combinations: AvailableCombinationResult
    ) -> PropertyGroupCollection:
        """
        Flag every option as combinable or not, dropping impossible ones.

        Each option is tested against the same base selection, so the
        outcome does not depend on evaluation order.

        Args:
            groups: Ordered groups, modified in place
            current: Group id -> selected option id
            combinations: Combinations of the existing variants

        Returns:
            The same collection, for chaining
        """
        for group in groups:
            if group.options is None:
                continue

            kept = []
            for option in group.options:
                status = self.is_combinable(option, current, combinations)

                if status == Combinability.EXCLUDED:
                    logger.debug("option_excluded", group_id=group.id, option_id=option.id)
                    continue

                option.combinable = status == Combinability.COMBINABLE
                kept.append(option)

            group.options = kept

        return groups


# Singleton instance for convenience
_configurator_service: Optional[ConfiguratorService] = None

def get_configurator_service() -> ConfiguratorService:
    """Get or create ConfiguratorService instance."""
    global _configurator_service
    if _configurator_service is None:
        _configurator_service = ConfiguratorService()
    return _configurator_service
