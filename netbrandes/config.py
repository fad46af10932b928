from __future__ import annotations

import os

import numpy as np

np.seterr(invalid="ignore")


def check_quiet() -> bool:
    """Check whether to enable quiet mode."""
    if "GCP_PROJECT" in os.environ:
        return True
    if "NETBRANDES_QUIET_MODE" in os.environ:
        if os.environ["NETBRANDES_QUIET_MODE"].lower() in ["true", "1"]:
            return True
    return False


QUIET_MODE = check_quiet()


# for all_close equality checks
ATOL: float = 0.001
RTOL: float = 0.0001
# fastmath flags
# no "ninf": unreached distances are held as inf
# no "reassoc": dependency sums must accumulate in a fixed order
FASTMATH: set[str] = {"nsz", "arcp", "contract", "afn"}
