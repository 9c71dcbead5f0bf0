"""
Similarity thresholds for the field checkers.

Defaults reproduce the production rules. Each threshold can be overridden
through an environment variable (entry points load `.env` first).
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)

ENV_PREFIX = "DOC_CONSISTENCY_"


class ConsistencyThresholds(BaseModel):
    """Cut-offs applied to `similarity()` scores.

    A pair is flagged when its score falls below the *mismatch* threshold,
    and flagged HIGH when it also falls below the *high* threshold.
    """

    model_config = ConfigDict(frozen=True)

    name_mismatch: float = Field(default=0.8, ge=0.0, le=1.0)
    name_high: float = Field(default=0.5, ge=0.0, le=1.0)
    address_mismatch: float = Field(default=0.7, ge=0.0, le=1.0)
    address_high: float = Field(default=0.4, ge=0.0, le=1.0)


DEFAULT_THRESHOLDS = ConsistencyThresholds()


def load_thresholds(env: Optional[Mapping[str, str]] = None) -> ConsistencyThresholds:
    """Build thresholds from DOC_CONSISTENCY_* variables.

    Args:
        env: Mapping to read from. Defaults to `os.environ`.

    Values that are not numbers in [0, 1] are logged and ignored.
    """
    env = os.environ if env is None else env
    overrides: dict[str, float] = {}

    for field_name in ConsistencyThresholds.model_fields:
        key = ENV_PREFIX + field_name.upper()
        raw = env.get(key)
        if raw is None or not raw.strip():
            continue
        try:
            value = float(raw)
        except ValueError:
            logger.warning("Ignoring %s=%r: not a number", key, raw)
            continue
        if not 0.0 <= value <= 1.0:
            logger.warning("Ignoring %s=%r: must be between 0 and 1", key, raw)
            continue
        overrides[field_name] = value

    if overrides:
        logger.info("Threshold overrides from environment: %s", overrides)
    return ConsistencyThresholds(**overrides)
