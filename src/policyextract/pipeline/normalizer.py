"""Reconcile a parsed response with the expected field list."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any


if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence


logger = logging.getLogger(__name__)


def normalize(parsed: Mapping[str, Any], fields: Sequence[str]) -> dict[str, str | None]:
    """Return exactly one entry per field, in field order.

    String values are copied. Missing keys and non-string values become
    None. Keys outside ``fields`` are dropped.
    """
    unexpected = [k for k in parsed if k not in fields]
    if unexpected:
        logger.debug("Dropping unexpected keys: %s", ", ".join(map(str, unexpected)))
    values: dict[str, str | None] = {}
    for name in fields:
        value = parsed.get(name)
        values[name] = value if isinstance(value, str) else None
    return values
