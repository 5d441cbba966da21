"""
Menu client package - consumes the menu API with a query-key cache.
"""

from menu_client.api import MenuApiClient
from menu_client.queries import MENU_QUERY_KEYS, QueryClient, use_get_menu

__all__ = ["MenuApiClient", "MENU_QUERY_KEYS", "QueryClient", "use_get_menu"]
