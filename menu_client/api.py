"""HTTP client for the menu endpoints."""

import logging
from typing import Any, Dict, Optional

import httpx

logger = logging.getLogger("jinaq.client")

MENU_BASE_PATH = "/api/v1/menu"


class MenuApiClient:
    """Thin httpx wrapper around ``GET /api/v1/menu/{restaurant_id}``."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self._client = httpx.Client(base_url=base_url, timeout=timeout, transport=transport)

    def get_menu(self, restaurant_id: str) -> Dict[str, Any]:
        """Fetch a restaurant menu; non-2xx responses raise httpx.HTTPStatusError."""
        response = self._client.get(f"{MENU_BASE_PATH}/{restaurant_id}")
        response.raise_for_status()
        logger.debug(f"menu_loaded restaurant_id={restaurant_id}")
        return response.json()

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "MenuApiClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
