"""
"Nice" axis ticks for consumers that chart the engine's output.

Tick spacing is 1, 2 or 5 times a power of ten, chosen by matplotlib's
``MaxNLocator`` so the values line up with what a matplotlib axis would
show.  The returned domain always covers the requested range.
"""

from matplotlib.ticker import MaxNLocator

from .constants import DEFAULT_TICK_COUNT, NICE_STEPS
from .data_model import NiceTicks


def generate_nice_ticks(
    min_value: float,
    max_value: float,
    target_count: int = DEFAULT_TICK_COUNT,
    integer: bool = False,
) -> NiceTicks:
    """Evenly spaced round tick values spanning ``[min_value, max_value]``.

    ``integer=True`` keeps the spacing at 1 or more, for count axes.

    Examples
    --------
    >>> generate_nice_ticks(50, 50).ticks
    [49, 50, 51]
    """
    if min_value > max_value:
        min_value, max_value = max_value, min_value
    if min_value == max_value:
        return NiceTicks(
            domain=(min_value - 1, max_value + 1),
            ticks=[min_value - 1, min_value, max_value + 1],
        )

    locator = MaxNLocator(nbins=max(1, int(target_count)), steps=NICE_STEPS, integer=integer)
    ticks = [round(float(t), 10) for t in locator.tick_values(min_value, max_value)]
    return NiceTicks(domain=(ticks[0], ticks[-1]), ticks=ticks)
