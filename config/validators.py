"""
Configuration Validation for the Blog Client

This module contains configuration validation logic.
Kept apart from settings.py so settings stay a plain list of constants.
"""

import logging

from utils.exceptions import ConfigurationError
from utils.helpers import is_valid_url

logger = logging.getLogger(__name__)


def validate_settings(require_auth: bool = False):
    """
    Validate that all required settings are properly configured.

    Args:
        require_auth: Also require the user pool settings (needed to sign in).

    Raises:
        ConfigurationError: If required settings are missing or invalid.
    """
    # Import settings here to avoid circular imports
    from config import settings

    errors = []

    # Required environment variables
    required_vars = [
        ("APPSYNC_GRAPHQL_ENDPOINT", settings.APPSYNC_GRAPHQL_ENDPOINT),
        ("APPSYNC_API_KEY", settings.APPSYNC_API_KEY),
        ("AWS_REGION", settings.AWS_REGION),
    ]
    if require_auth:
        required_vars.extend([
            ("COGNITO_USER_POOL_ID", settings.COGNITO_USER_POOL_ID),
            ("COGNITO_APP_CLIENT_ID", settings.COGNITO_APP_CLIENT_ID),
        ])

    for var_name, var_value in required_vars:
        if not var_value:
            errors.append(f"Missing required environment variable: {var_name}")

    if settings.APPSYNC_GRAPHQL_ENDPOINT and not is_valid_url(settings.APPSYNC_GRAPHQL_ENDPOINT):
        errors.append(f"APPSYNC_GRAPHQL_ENDPOINT is not a valid URL: {settings.APPSYNC_GRAPHQL_ENDPOINT}")

    if not require_auth and not settings.COGNITO_APP_CLIENT_ID:
        logger.warning("COGNITO_APP_CLIENT_ID is not set. Signing in will not be possible.")

    # Validate numeric settings are within reasonable bounds
    numeric_validations = [
        ("REQUEST_TIMEOUT", settings.REQUEST_TIMEOUT, 1, 300),
        ("LIST_PAGE_SIZE", settings.LIST_PAGE_SIZE, 1, 1000),
        ("CONTENT_PREVIEW_LENGTH", settings.CONTENT_PREVIEW_LENGTH, 10, 10000),
    ]

    for name, value, min_val, max_val in numeric_validations:
        if value < min_val or value > max_val:
            errors.append(f"{name} must be between {min_val} and {max_val}, got {value}")

    # Raise all errors at once
    if errors:
        error_msg = "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
        raise ConfigurationError(error_msg)

    return True


def get_config_summary() -> dict:
    """
    Returns a summary of current configuration (without sensitive values).
    Useful for logging startup state.
    """
    # Import settings here to avoid circular imports
    from config import settings

    endpoint = settings.APPSYNC_GRAPHQL_ENDPOINT
    return {
        "api": {
            "endpoint": endpoint[:40] + "..." if endpoint and len(endpoint) > 40 else endpoint,
            "api_key_configured": bool(settings.APPSYNC_API_KEY),
            "region": settings.AWS_REGION,
        },
        "auth": {
            "user_pool_id": settings.COGNITO_USER_POOL_ID,
            "app_client_configured": bool(settings.COGNITO_APP_CLIENT_ID),
            "credentials_in_env": bool(settings.BLOG_USERNAME and settings.BLOG_PASSWORD),
        },
        "requests": {
            "timeout_seconds": settings.REQUEST_TIMEOUT,
            "list_page_size": settings.LIST_PAGE_SIZE,
        },
    }
