import os
from pathlib import Path
from typing import Optional

import yaml

from sgclient_core.client import DEFAULT_BASE_URL, DEFAULT_TIMEOUT, DEFAULT_USER_AGENT, Client

DEFAULT_CONFIG: dict = {
    "base_url": DEFAULT_BASE_URL,
    "timeout": DEFAULT_TIMEOUT,
    "user_agent": DEFAULT_USER_AGENT,
}

_API_PATH = ".api/"


def _api_base_url(endpoint: str) -> str:
    """Turn an instance endpoint (https://sourcegraph.example.com) into its API base URL."""
    endpoint = endpoint.rstrip("/") + "/"
    if endpoint.endswith("/" + _API_PATH):
        return endpoint
    return endpoint + _API_PATH


def load_config(config_path: str = ".sgclient.yml", cli_overrides: Optional[dict] = None) -> dict:
    """
    Load configuration by merging (in order of precedence):
      1. Built-in defaults
      2. .sgclient.yml in the current directory
      3. SRC_ENDPOINT environment variable
      4. CLI argument overrides
    """
    config = dict(DEFAULT_CONFIG)

    path = Path(config_path)
    if path.exists():
        with open(path) as f:
            file_config = yaml.safe_load(f) or {}
        config.update(file_config)

    endpoint = os.environ.get("SRC_ENDPOINT")
    if endpoint:
        config["base_url"] = _api_base_url(endpoint)

    if cli_overrides:
        for key, value in cli_overrides.items():
            if value is not None:
                config[key] = value

    # Resolve credentials from environment variables
    config["access_token"] = os.environ.get("SRC_ACCESS_TOKEN")

    return config


def build_client(config: dict) -> Client:
    return Client(
        base_url=config["base_url"],
        token=config.get("access_token"),
        user_agent=config["user_agent"],
        timeout=config["timeout"],
    )
