# config.py

import os
from typing import List


def _env_ints(name: str, default: List[int]) -> List[int]:
    raw = os.environ.get(name)
    if not raw:
        return list(default)
    return [int(part) for part in raw.replace(" ", "").split(",") if part]


class Config:
    """Application settings for the visual lab host.

    Class attributes hold the defaults; ``Config.from_env()`` returns an
    instance with any ``DSA_LAB_*`` environment variables applied.

    Attributes
    ----------
    default_array:
        Array shown when a session starts.
    default_target:
        Initial search target / target sum.
    default_speed_ms:
        Delay between auto-advance steps, in milliseconds.
    random_length:
        Number of values the "Random Array" button generates.
    max_value:
        Exclusive upper bound for random values.
    poll_interval_ms:
        Fallback delay between browser polls of ``/api/state`` while playing.
    max_labs:
        Most per-session labs kept in memory; the least recently used one
        is dropped beyond that.
    host, port, debug:
        Passed to ``app.run``.
    log_level:
        Name of the root logging level.
    """

    default_array = [64, 34, 25, 12, 22, 11, 90]
    default_target = 22
    default_speed_ms = 500
    random_length = 8
    max_value = 100
    poll_interval_ms = 50
    max_labs = 256

    host = "0.0.0.0"
    port = 5000
    debug = False
    log_level = "INFO"

    @classmethod
    def from_env(cls) -> "Config":
        cfg = cls()
        cfg.default_array = _env_ints("DSA_LAB_ARRAY", cls.default_array)
        cfg.default_target = int(os.environ.get("DSA_LAB_TARGET", cls.default_target))
        cfg.default_speed_ms = int(os.environ.get("DSA_LAB_SPEED_MS", cls.default_speed_ms))
        cfg.random_length = int(os.environ.get("DSA_LAB_RANDOM_LENGTH", cls.random_length))
        cfg.max_value = int(os.environ.get("DSA_LAB_MAX_VALUE", cls.max_value))
        cfg.poll_interval_ms = int(os.environ.get("DSA_LAB_POLL_MS", cls.poll_interval_ms))
        cfg.max_labs = max(1, int(os.environ.get("DSA_LAB_MAX_LABS", cls.max_labs)))
        cfg.host = os.environ.get("DSA_LAB_HOST", cls.host)
        cfg.port = int(os.environ.get("DSA_LAB_PORT", cls.port))
        cfg.debug = os.environ.get("DSA_LAB_DEBUG", "").lower() in ("1", "true", "yes")
        cfg.log_level = os.environ.get("DSA_LAB_LOG_LEVEL", cls.log_level).upper()
        return cfg
