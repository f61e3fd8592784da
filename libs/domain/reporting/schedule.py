from __future__ import annotations

import random

# Settling time we give the host to finish starting before polling its state.
SETTLING_TIME_S = 10.0


def add_jitter(base: float, rng: random.Random | None = None) -> float:
    """
    Add up to one percent of ``base`` as extra delay, so a fleet of reporters
    started together does not hit the shared topic and endpoint in lockstep.
    Result is in [base, base + base/100] for base > 0.
    """
    if base <= 0:
        return max(base, 0.0)
    r = rng or random
    return base + r.uniform(0.0, base / 100.0)
