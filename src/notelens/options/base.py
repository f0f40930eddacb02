#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Base classes for notelens options.

Every configurable component takes a frozen dataclass of options. Instances
are immutable; derive variants with :meth:`CloneFrozenMixin.create_updated`.
Components accept ``None`` for defaults and check anything else with
:func:`validate_options`.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, replace
from typing import Any, TypeVar

from notelens.exceptions import InvalidOptionsError

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Give frozen option dataclasses a way to derive modified copies."""

    def create_updated(self, **kwargs: Any) -> Self:
        """Return a copy of these options with the given fields replaced.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values. Field validation runs again on
            the copy.

        """
        return replace(self, **kwargs)


OptionsT = TypeVar("OptionsT", bound=CloneFrozenMixin)


def validate_options(options: Any, expected_type: type[OptionsT], component_name: str) -> OptionsT:
    """Return *options*, or default options when it is None.

    Parameters
    ----------
    options : object or None
        Options passed by the caller.
    expected_type : type
        The options class the component works with.
    component_name : str
        Name of the component (for error messages).

    Raises
    ------
    InvalidOptionsError
        If options are not None and not an instance of expected_type.

    """
    if options is None:
        return expected_type()
    if not isinstance(options, expected_type):
        raise InvalidOptionsError(component_name, expected_type, type(options))
    return options
