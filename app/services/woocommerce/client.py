"""WooCommerce API client utilities."""

import logging
from typing import Any, Dict, Optional

import requests
from woocommerce import API

from app.core.exceptions import RecordStoreError
from app.factories.woocommerce_factory import WooCommerceClientFactory

__logger__ = logging.getLogger(__name__)


def wc_get(
    path: str,
    params: Optional[Dict[str, Any]] = None,
    wcapi: API = None
) -> Optional[Any]:
    """
    Execute GET request to WooCommerce API.

    Args:
        path: API endpoint path
        params: Query parameters
        wcapi: WooCommerce API client (creates default if None)

    Returns:
        JSON response, or None when the resource does not exist (404)

    Raises:
        RecordStoreError: on transport errors or any other non-2xx status
    """
    if wcapi is None:
        wcapi = WooCommerceClientFactory.from_settings()

    __logger__.debug(f"WC Request: GET {path} with params: {params}")
    try:
        r = wcapi.get(path, params=params) if params else wcapi.get(path)
    except requests.exceptions.RequestException as e:
        __logger__.error(f"WooCommerce GET failed on {path}: {e}")
        raise RecordStoreError(f"WooCommerce request failed on {path}: {e}") from e

    if r.status_code == 404:
        __logger__.debug(f"WooCommerce GET {path}: not found")
        return None
    if not r.ok:
        __logger__.error(f"WooCommerce GET error on {path}: {r.status_code} - {r.text}")
        raise RecordStoreError(
            f"WooCommerce API error ({r.status_code}): {r.text}",
            status_code=r.status_code
        )
    return r.json()
