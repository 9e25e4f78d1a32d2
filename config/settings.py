"""
Settings — Default configuration values for the ADO batch importer.

This module provides the DEFAULT_SETTINGS dict that the orchestrator uses as
fallback values when environment variables are not set. The actual configuration
is loaded from .env at runtime; the organization, project and PAT have no
defaults and must always be supplied.

Configuration precedence (highest to lowest):
  1. CLI flags (--items, --debug)
  2. Environment variables (from .env file)
  3. DEFAULT_SETTINGS (this file)

Settings reference:
  SERVICE_URL       Azure DevOps base URL (default: https://dev.azure.com)
  API_VERSION       Work item tracking REST API version (default: 7.0)
  ITEMS_PATH        JSON file holding the user stories to import
  APP_NAME          Label printed in the run header
  REQUEST_TIMEOUT   Seconds before a single create call is abandoned
  DEBUG             Whether to print verbose output (default: False)
"""

APP_NAME = "FR App"

DEFAULT_SETTINGS = {
    "SERVICE_URL": "https://dev.azure.com",
    "API_VERSION": "7.0",
    "ITEMS_PATH": "./data/items.json",
    "APP_NAME": APP_NAME,
    "REQUEST_TIMEOUT": 30,
    "DEBUG": False,
}
