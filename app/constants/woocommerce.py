"""Constants for WooCommerce / WordPress entities."""


class WCProductType:
    """WooCommerce product type constants."""
    SIMPLE = "simple"
    GROUPED = "grouped"
    EXTERNAL = "external"
    VARIABLE = "variable"
    VARIATION = "variation"


class WCProductStatus:
    """WooCommerce product status constants."""
    DRAFT = "draft"
    PENDING = "pending"
    PRIVATE = "private"
    PUBLISH = "publish"
    TRASH = "trash"


class WPPostType:
    """WordPress post types carrying catalog entities."""
    PRODUCT = "product"
    PRODUCT_VARIATION = "product_variation"


class WPTaxonomy:
    """WordPress taxonomy keys."""
    PRODUCT_BRAND = "product_brand"
    PRODUCT_CAT = "product_cat"


class WPHook:
    """WordPress / WooCommerce action names the reactor subscribes to."""
    TRANSITION_POST_STATUS = "transition_post_status"
    PRE_POST_UPDATE = "pre_post_update"
    UPDATE_PRODUCT = "woocommerce_update_product"
    UPDATE_PRODUCT_VARIATION = "woocommerce_update_product_variation"
    BEFORE_DELETE_POST = "before_delete_post"

    ALL = (
        TRANSITION_POST_STATUS,
        PRE_POST_UPDATE,
        UPDATE_PRODUCT,
        UPDATE_PRODUCT_VARIATION,
        BEFORE_DELETE_POST,
    )
