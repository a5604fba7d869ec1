"""Factory for creating WooCommerce API clients."""

from woocommerce import API

from app.core.config import settings


class WooCommerceClientFactory:
    """Factory class for creating WooCommerce API clients."""

    @staticmethod
    def from_credentials(
        url: str,
        consumer_key: str,
        consumer_secret: str,
        version: str = None
    ) -> API:
        """
        Create a WooCommerce API client from individual credentials.

        Args:
            url: WooCommerce store URL
            consumer_key: WooCommerce consumer key
            consumer_secret: WooCommerce consumer secret
            version: REST namespace (defaults to ``settings.wc_api_version``)

        Returns:
            API: Configured WooCommerce API client
        """
        return API(
            url=url,
            consumer_key=consumer_key,
            consumer_secret=consumer_secret,
            wp_api=True,
            version=version or settings.wc_api_version,
            timeout=settings.wc_request_timeout,
            verify_ssl=settings.wc_verify_ssl
        )

    @staticmethod
    def from_settings() -> API:
        """Create the WooCommerce products client configured in settings."""
        return WooCommerceClientFactory.from_credentials(
            url=settings.wc_base_url,
            consumer_key=settings.wc_consumer_key,
            consumer_secret=settings.wc_consumer_secret
        )

    @staticmethod
    def media_from_settings() -> API:
        """Create a WordPress ``wp/v2`` client for attachment lookups."""
        return WooCommerceClientFactory.from_credentials(
            url=settings.wc_base_url,
            consumer_key=settings.wc_consumer_key,
            consumer_secret=settings.wc_consumer_secret,
            version="wp/v2"
        )
