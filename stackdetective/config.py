"""Default configuration constants."""

from __future__ import annotations

from dataclasses import dataclass


# Secondary ordering for records with equal distance values
VALID_TIE_BREAKS = frozenset({"insertion", "natural"})


@dataclass(frozen=True)
class Defaults:
    # Ordering
    tie_break: str = "insertion"

    # Distance contract
    validate_distances: bool = True

    # Progress reporting for bulk adds
    show_progress: bool = False
    progress_desc: str = "Computing distances"

    # Logging
    log_format: str = "%(asctime)s %(levelname)-8s %(message)s"
    log_datefmt: str = "%H:%M:%S"


DEFAULTS = Defaults()
