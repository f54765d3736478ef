"""
Configuration settings for eemumu event generation.

Defaults can be overridden through environment variables:

    EEMUMU_CHUNK_SIZE          events sampled per batch (default 100)
    EEMUMU_MAX_BATCHES         batch cap before giving up, 0 or "none" disables (default 100000)
    EEMUMU_PROCESS             registered process name (default "ee->mumu")
    EEMUMU_LOG_LEVEL           logging level for the CLI (default WARNING)
    EEMUMU_DECIMAL_PRECISION   digits for --precision decimal (default 50)
"""

import os
from typing import Optional


def parse_optional_int(raw: str) -> Optional[int]:
    if raw.strip().lower() in ("", "0", "none"):
        return None
    return int(raw)


# =============================================================================
# Generation
# =============================================================================

DEFAULT_CHUNK_SIZE = int(os.getenv("EEMUMU_CHUNK_SIZE", "100"))
DEFAULT_MAX_BATCHES = parse_optional_int(os.getenv("EEMUMU_MAX_BATCHES", "100000"))
DEFAULT_PROCESS = os.getenv("EEMUMU_PROCESS", "ee->mumu")

# =============================================================================
# CLI
# =============================================================================

DEFAULT_ENERGY_MEV = 1000.0
DEFAULT_N_EVENTS = 1000
LOG_LEVEL = os.getenv("EEMUMU_LOG_LEVEL", "WARNING").upper()
DECIMAL_PRECISION = int(os.getenv("EEMUMU_DECIMAL_PRECISION", "50"))
