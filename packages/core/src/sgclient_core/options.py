"""Request option types and their query string encoding."""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any


@dataclass
class ListOptions:
    """Paging options shared by list endpoints. Zero means "server default"."""

    per_page: int = 0
    page: int = 0


def _camel(name: str) -> str:
    return "".join(part[:1].upper() + part[1:] for part in name.split("_"))


def query_params(opt: Any) -> list[tuple[str, str]]:
    """Encode an options dataclass as query string pairs.

    Field names become CamelCase keys unless the field metadata sets
    ``query``. Empty values are omitted. Lists repeat the key, or are joined
    with commas when the field metadata sets ``comma``.
    """
    if opt is None:
        return []
    params: list[tuple[str, str]] = []
    for f in fields(opt):
        value = getattr(opt, f.name)
        if not value:
            continue
        key = f.metadata.get("query", _camel(f.name))
        if isinstance(value, bool):
            params.append((key, "true"))
        elif isinstance(value, (list, tuple)):
            if f.metadata.get("comma"):
                params.append((key, ",".join(str(v) for v in value)))
            else:
                params.extend((key, str(v)) for v in value)
        else:
            params.append((key, str(value)))
    return params
