from typing import Dict

from freeproduct.core.constants import SimpleAction, INVALID_GIFT_SKU_MESSAGE
from freeproduct.core.exceptions import RuleConfigurationError
from freeproduct.repository.catalog import CatalogRepository

from freeproduct.logging.utils import get_app_logger
logger = get_app_logger("freeproduct.rule_configuration_validator")


class RuleConfigurationValidator:
    """Checks the gift SKU of an add_gift rule before it is saved"""

    def __init__(self, catalog: CatalogRepository):
        self.catalog = catalog

    def validate(self, params: Dict) -> None:
        """
        Args:
            params: Posted rule form data

        Raises:
            RuleConfigurationError: If the action is add_gift and the SKU is empty or unknown
        """
        if params.get("simple_action") != SimpleAction.ADD_GIFT:
            return

        gift_sku = (params.get("gift_sku") or "").strip()
        if not gift_sku or not self.catalog.get_id_by_sku(gift_sku):
            logger.warning(f"invalid_gift_sku | rule_id={params.get('rule_id')} gift_sku={gift_sku!r}")
            raise RuleConfigurationError(INVALID_GIFT_SKU_MESSAGE)
