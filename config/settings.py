"""
Configuration Settings for the Blog Client

This module centralizes all configuration settings for the blog client,
including environment variables, backend endpoints, and application constants.
"""

import os
from pathlib import Path
from dotenv import load_dotenv

# Determine the application root directory
APP_ROOT = Path(__file__).resolve().parent.parent

# Load environment variables from .env file
load_dotenv(dotenv_path=os.path.join(APP_ROOT, '.env'))

# GraphQL API (AppSync)
APPSYNC_GRAPHQL_ENDPOINT = os.getenv("APPSYNC_GRAPHQL_ENDPOINT", "")
APPSYNC_API_KEY = os.getenv("APPSYNC_API_KEY", "")
AWS_REGION = os.getenv("AWS_REGION", "us-east-1")

# Cognito User Pool Authentication
COGNITO_USER_POOL_ID = os.getenv("COGNITO_USER_POOL_ID", "")
COGNITO_APP_CLIENT_ID = os.getenv("COGNITO_APP_CLIENT_ID", "")

# Optional credentials for non-interactive sign in
BLOG_USERNAME = os.getenv("BLOG_USERNAME")
BLOG_PASSWORD = os.getenv("BLOG_PASSWORD")

# =============================================================================
# Request Settings
# =============================================================================

REQUEST_TIMEOUT = int(os.getenv("REQUEST_TIMEOUT", "10"))   # Seconds per GraphQL call
LIST_PAGE_SIZE = int(os.getenv("LIST_PAGE_SIZE", "100"))    # Items per listBlogPosts page

# =============================================================================
# Edit Buffer Defaults
# =============================================================================

DEFAULT_POST_TITLE = "Blog Title"
DEFAULT_POST_CONTENT = "Blog Content"

# =============================================================================
# Display Settings
# =============================================================================

CONTENT_PREVIEW_LENGTH = 100         # Card preview is truncated past this many characters
POST_IMAGE_URL = "https://picsum.photos/200"   # Random image attached to each card
DATE_DISPLAY_FORMAT = "%a %b %d %Y %H:%M:%S %Z"
