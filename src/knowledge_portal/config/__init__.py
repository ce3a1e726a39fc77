"""Configuration module — settings and constants."""

from knowledge_portal.config.constants import (
    ALL_EMPLOYEES,
    ALL_TIME,
    ALL_TOPICS,
    DATE_FILTERS,
    DEFAULT_DATA_DIR,
    DEFAULT_SESSION_COOKIE_NAME,
    DEFAULT_SESSION_TTL_HOURS,
    INVALID_CREDENTIALS_MESSAGE,
    QUERIES_FILENAME,
    SESSION_TOKEN_BYTES,
    TOPICS,
    UNAUTHENTICATED_MESSAGE,
    USERS_FILENAME,
    parse_topic,
)
from knowledge_portal.config.settings import (
    ApiSettings,
    SessionSettings,
    Settings,
    StoreSettings,
    get_settings,
    reload_settings,
)

__all__ = [
    # Constants
    "TOPICS",
    "parse_topic",
    "DATE_FILTERS",
    "ALL_TOPICS",
    "ALL_EMPLOYEES",
    "ALL_TIME",
    "DEFAULT_DATA_DIR",
    "USERS_FILENAME",
    "QUERIES_FILENAME",
    "DEFAULT_SESSION_TTL_HOURS",
    "DEFAULT_SESSION_COOKIE_NAME",
    "SESSION_TOKEN_BYTES",
    "INVALID_CREDENTIALS_MESSAGE",
    "UNAUTHENTICATED_MESSAGE",
    # Settings
    "ApiSettings",
    "Settings",
    "StoreSettings",
    "SessionSettings",
    "get_settings",
    "reload_settings",
]
