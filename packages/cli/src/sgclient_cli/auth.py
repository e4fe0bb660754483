"""Access token resolution with src CLI config fallback.

Resolution order (stops at first success):
  1. SRC_ACCESS_TOKEN environment variable (CI / explicit override)
  2. accessToken in the src CLI config file (SRC_CONFIG, or ~/src-config.json)
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

_DEFAULT_SRC_CONFIG = "~/src-config.json"


def resolve_access_token() -> str | None:
    """Return an access token or None if no valid source is available.

    Never raises — callers decide whether an anonymous client is acceptable.
    """
    token = os.environ.get("SRC_ACCESS_TOKEN")
    if token:
        return token

    path = Path(os.environ.get("SRC_CONFIG") or _DEFAULT_SRC_CONFIG).expanduser()
    if not path.exists():
        return None
    try:
        data = json.loads(path.read_text())
    except (OSError, json.JSONDecodeError) as e:
        logger.warning("Could not read src config %s: %s", path, e)
        return None

    token = data.get("accessToken") if isinstance(data, dict) else None
    if token:
        logger.debug("Resolved access token from %s.", path)
        return token
    return None
