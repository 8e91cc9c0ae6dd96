"""Loader for the manual name mapping file (``usermapping.json``)."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from types import MappingProxyType
from typing import Any, Union

from models import AliasTable

DEFAULT_ALIAS_PATH = Path("usermapping.json")

logger = logging.getLogger(__name__)

_EMPTY: AliasTable = MappingProxyType({})


def load_alias_table(path: Union[str, Path, None] = None) -> AliasTable:
    """Read a flat JSON object of name -> name.

    A missing, unreadable or malformed file gives an empty table; the bot keeps
    running with automatic matching only.
    """
    alias_path = Path(path) if path is not None else DEFAULT_ALIAS_PATH
    try:
        with alias_path.open(encoding="utf-8") as fh:
            payload: Any = json.load(fh)
    except FileNotFoundError:
        logger.info("alias_table_missing", extra={"path": str(alias_path)})
        return _EMPTY
    except (OSError, ValueError) as exc:
        logger.warning("alias_table_unreadable", extra={"path": str(alias_path), "error": str(exc)})
        return _EMPTY

    if not isinstance(payload, dict):
        logger.warning(
            "alias_table_not_object",
            extra={"path": str(alias_path), "body_type": type(payload).__name__},
        )
        return _EMPTY

    if not all(isinstance(k, str) and isinstance(v, str) for k, v in payload.items()):
        logger.warning("alias_table_non_string_entry", extra={"path": str(alias_path)})
        return _EMPTY

    logger.info("alias_table_loaded", extra={"path": str(alias_path), "entries": len(payload)})
    return MappingProxyType(dict(payload))
