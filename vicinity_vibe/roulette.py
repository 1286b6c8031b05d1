"""Boredom roulette: pick something to do nearby."""

import random
from typing import List, Optional

from .config import ROULETTE_OPTIONS
from .scoring import RandomFn


def spin(
    options: Optional[List[str]] = None,
    rng_fn: Optional[RandomFn] = None
) -> Optional[str]:
    """
    Pick one option uniformly at random.

    Args:
        options: Activities to choose from (defaults to ROULETTE_OPTIONS)
        rng_fn: Callable returning floats in [0, 1)

    Returns:
        The chosen option, or None if there are no options
    """
    if options is None:
        options = ROULETTE_OPTIONS
    if not options:
        return None

    rng_fn = rng_fn or random.random
    index = min(int(rng_fn() * len(options)), len(options) - 1)
    return options[max(index, 0)]
