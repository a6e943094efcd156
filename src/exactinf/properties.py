"""Configuration of the exact inference algorithm.

Exact inference has nothing to tune, so the only option is the verbosity of
the diagnostic log output.  Options arrive either as an `ExactInfProperties`
instance or as a plain mapping, which is validated by `from_dict`.
"""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import attr

from .errors import MalformedConfig


@attr.dataclass(frozen=True)
class ExactInfProperties:
    """Options of `ExactInference`.

    Attributes:
        verbose (int): Amount of log output; 0 is silent, 1 logs progress at
            INFO level and 2 adds DEBUG details.  It never changes results.
    """
    verbose: int = 0

    def __attrs_post_init__(self):
        if isinstance(self.verbose, bool) or not isinstance(self.verbose, int):
            raise MalformedConfig(f"verbose must be an integer, got {self.verbose!r}.")
        if self.verbose < 0:
            raise MalformedConfig(f"verbose must be non-negative, got {self.verbose}.")

    @classmethod
    def from_dict(cls, opts: Mapping[str, Any]) -> ExactInfProperties:
        """Builds the properties from a mapping of option names to values.

        Raises:
          MalformedConfig: if `opts` contains an unknown key or an invalid value.
        """
        known = {field.name for field in attr.fields(cls)}
        unknown = sorted(set(opts) - known)
        if unknown:
            raise MalformedConfig(f"Unknown properties for {cls.__name__}: {unknown}.")
        return cls(**opts)

    def to_dict(self) -> dict[str, Any]:
        return attr.asdict(self)

    def __str__(self) -> str:
        return "[%s]" % ",".join("%s=%s" % item for item in self.to_dict().items())
