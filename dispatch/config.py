#Purpose: Environment-driven settings for the dispatch service.
#Reads overrides from the process environment (and a .env file if present).
#Example in .env:
#DISPATCH_BUSY_WINDOW_SECONDS=3600
#DISPATCH_MAX_DISTANCE=20
#DISPATCH_LOG_LEVEL=DEBUG

import logging
import os

from dotenv import load_dotenv

from drivers.policy import DriverPolicy

load_dotenv()

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def policy_from_env() -> DriverPolicy:
    """
    Builds a validated DriverPolicy, falling back to the defaults for unset values.
    """
    defaults = DriverPolicy()
    policy = DriverPolicy(
        busy_window_seconds=int(os.getenv("DISPATCH_BUSY_WINDOW_SECONDS", defaults.busy_window_seconds)),
        min_distance=float(os.getenv("DISPATCH_MIN_DISTANCE", defaults.min_distance)),
        max_distance=float(os.getenv("DISPATCH_MAX_DISTANCE", defaults.max_distance)),
    )
    policy.validate()
    return policy


def configure_logging(level: str = None) -> None:
    level = (level or os.getenv("DISPATCH_LOG_LEVEL", "INFO")).upper()
    logging.basicConfig(level=level, format=LOG_FORMAT)
