"""
Core constants for the Freeproduct service

Sales rule action kinds, cart line option codes, product statuses and
error codes shared across the application.
"""

class SimpleAction:
    """Sales rule action kinds"""

    BY_PERCENT = "by_percent"
    BY_FIXED = "by_fixed"
    CART_FIXED = "cart_fixed"
    BUY_X_GET_Y = "buy_x_get_y"
    ADD_GIFT = "add_gift"

    # Options offered by the admin form before the gift action is added
    STANDARD_OPTIONS = [
        {"value": BY_PERCENT, "label": "Percent of product price discount"},
        {"value": BY_FIXED, "label": "Fixed amount discount"},
        {"value": CART_FIXED, "label": "Fixed amount discount for whole cart"},
        {"value": BUY_X_GET_Y, "label": "Buy X get Y free (discount amount is Y)"},
    ]


class LineOptionCode:
    """Codes of the options attached to a cart line"""

    # Replayable request the line was built from, read back on reorder
    INFO_BUY_REQUEST = "info_buyRequest"
    # Unique per gift line so lines of the same gift never combine
    FREEPRODUCT_UNIQID = "freeproduct_uniqid"

    # Options ignored when deciding whether two lines represent the same product
    NOT_REPRESENT_OPTIONS = [INFO_BUY_REQUEST]


class ProductStatus:
    ENABLED = 1
    DISABLED = 2


class GiftErrorCode:
    INVALID_GIFT_SKU = "INVALID_GIFT_SKU"
    RULE_NOT_FOUND = "RULE_NOT_FOUND"
    GIFT_QTY_INVALID = "GIFT_QTY_INVALID"
    GIFT_NOT_FOUND = "GIFT_NOT_FOUND"
    GIFT_NOT_SALABLE = "GIFT_NOT_SALABLE"


INVALID_GIFT_SKU_MESSAGE = "The free product SKU must be a valid product."
