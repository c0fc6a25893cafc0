"""
Settings — SDK constants and default configuration values.

This module provides the DEFAULT_SETTINGS dict that the Facebook facade and
the run.py CLI use as fallback values when neither an explicit config key nor
an environment variable is set.

Configuration precedence (highest to lowest):
  1. Explicit config dict / CLI flags (--debug, --beta, --token)
  2. Environment variables (optionally loaded from a .env file)
  3. DEFAULT_SETTINGS (this file)

Settings reference:
  FACEBOOK_APP_ID             The app ID from the App Dashboard (required)
  FACEBOOK_APP_SECRET         The app secret (required)
  FACEBOOK_APP_GRAPH_VERSION  Graph API version prefix, e.g. "v15.0"
  FACEBOOK_ACCESS_TOKEN       Default user/page/app token for requests
  FACEBOOK_ENABLE_BETA_MODE   Send requests to graph.beta.facebook.com
  DEBUG                       Whether to print verbose output
"""

import os
from pathlib import Path
from typing import Any, Dict

from dotenv import load_dotenv

VERSION = "1.0.0"
DEFAULT_GRAPH_VERSION = "v15.0"

APP_ID_ENV_NAME = "FACEBOOK_APP_ID"
APP_SECRET_ENV_NAME = "FACEBOOK_APP_SECRET"
APP_GRAPH_VERSION_ENV_NAME = "FACEBOOK_APP_GRAPH_VERSION"
ACCESS_TOKEN_ENV_NAME = "FACEBOOK_ACCESS_TOKEN"
BETA_MODE_ENV_NAME = "FACEBOOK_ENABLE_BETA_MODE"

SDK_USER_AGENT = f"facebook-graph-sdk-python-{VERSION}"

DEFAULT_SETTINGS = {
    "DEFAULT_GRAPH_VERSION": DEFAULT_GRAPH_VERSION,
    "ENABLE_BETA_MODE": False,
    "DEBUG": False,
}


def load_config(env_file: str = "./.env", debug: bool = False) -> Dict[str, Any]:
    """Build a Facebook() config dict from the environment.

    If env_file exists it is loaded with python-dotenv first (values already
    present in os.environ are not overridden).

    Args:
        env_file: Path to a .env file.
        debug: Print which source the configuration came from.

    Returns:
        A dict with app_id, app_secret, default_graph_version,
        enable_beta_mode, debug and (when set) default_access_token.
    """
    env_path = Path(env_file)
    if env_path.exists():
        load_dotenv(env_path)
        if debug:
            print(f"  Loaded configuration from: {env_file}")
    elif debug:
        print(f"  {env_file} not found, using defaults/environment")

    config = {
        "app_id": os.getenv(APP_ID_ENV_NAME, ""),
        "app_secret": os.getenv(APP_SECRET_ENV_NAME, ""),
        "default_graph_version": os.getenv(
            APP_GRAPH_VERSION_ENV_NAME, DEFAULT_SETTINGS["DEFAULT_GRAPH_VERSION"]
        ),
        "enable_beta_mode": os.getenv(
            BETA_MODE_ENV_NAME, str(DEFAULT_SETTINGS["ENABLE_BETA_MODE"])
        ).lower() == "true",
        "debug": debug or os.getenv("DEBUG", str(DEFAULT_SETTINGS["DEBUG"])).lower() == "true",
    }

    access_token = os.getenv(ACCESS_TOKEN_ENV_NAME, "")
    if access_token:
        config["default_access_token"] = access_token

    return config
