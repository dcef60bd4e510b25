"""Per-call configuration of the filter resizer."""

from dataclasses import dataclass, replace
from typing import Union

from .. import constants as cte
from ..errors import InvalidOptionError
from ..filters import FilterKernel, get_filter
from .pixelbuffer import check_overflow


@dataclass(frozen=True)
class ResizeOptions:
    """
    Options of ``resize``.

    Attributes:
        filter: FilterKernel or preset name (default: Lanczos, radius 3)
        filter_scale: Kernel widening factor applied when downsampling (> 0)
        linearize: Resample colour channels in linear light
        skip_alpha: Force destination alpha to 255 and resample RGB only.
                    When False, alpha is resampled like colour but is never
                    linearized.
        clamp: Clamp resampled values into [0, 255]. Off by default: filter
               ringing can push values outside the 8-bit range.
        overflow: How out-of-range values are stored in 8 bits,
                  ``"saturate"`` or ``"wrap"``
    """

    filter: Union[FilterKernel, str] = cte.DEFAULT_FILTER_NAME
    filter_scale: float = cte.DEFAULT_FILTER_SCALE
    linearize: bool = cte.DEFAULT_LINEARIZE
    skip_alpha: bool = cte.DEFAULT_SKIP_ALPHA
    clamp: bool = False
    overflow: str = cte.DEFAULT_OVERFLOW

    def __post_init__(self):
        object.__setattr__(self, "filter", get_filter(self.filter))
        if not self.filter_scale > 0:
            raise InvalidOptionError(f"filter_scale must be > 0, got {self.filter_scale}")
        check_overflow(self.overflow)

    def replace(self, **changes):
        """Return a copy with some fields changed."""
        return replace(self, **changes)


DEFAULT_OPTIONS = ResizeOptions()


def resolve_options(options=None, **overrides):
    """Merge keyword overrides into ``options`` (or the defaults)."""
    if options is None:
        options = DEFAULT_OPTIONS
    elif not isinstance(options, ResizeOptions):
        raise TypeError("options must be a ResizeOptions instance")
    overrides = {k: v for k, v in overrides.items() if v is not None}
    return options.replace(**overrides) if overrides else options


__all__ = ["ResizeOptions", "DEFAULT_OPTIONS", "resolve_options"]
