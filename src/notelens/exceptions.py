#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the notelens library.

Search and conversion never raise for bad *data*: an unusable query compiles
to a matcher that finds nothing, and unrecognized HTML falls through to its
text content. The exceptions below are reserved for programming errors at the
API boundary, such as handing the converter something that is not HTML or
giving a component the wrong options class.

Exception Hierarchy
-------------------
- NotelensError (base exception)

  - ValidationError (bad argument at an entry point)
    - InvalidOptionsError (options object of the wrong class)

"""

from typing import Any


class NotelensError(Exception):
    """Root of all notelens errors.

    Parameters
    ----------
    message : str
        What went wrong.
    original_error : Exception, optional
        Lower-level exception this error wraps.

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(NotelensError):
    """An entry point received an argument it cannot work with.

    Raised, for example, when the converter is given an object that is not
    HTML text or a BeautifulSoup node, or when navigation is asked to move in
    an unknown direction.

    Parameters
    ----------
    message : str
        What went wrong.
    parameter_name : str, optional
        Name of the offending argument.
    parameter_value : any, optional
        The value that was rejected.
    original_error : Exception, optional
        Lower-level exception this error wraps.

    """

    def __init__(
        self,
        message: str,
        parameter_name: str | None = None,
        parameter_value: Any = None,
        original_error: Exception | None = None,
    ):
        super().__init__(message, original_error=original_error)
        self.parameter_name = parameter_name
        self.parameter_value = parameter_value


class InvalidOptionsError(ValidationError):
    """A component was given an options object of the wrong class.

    The rejected class is kept in ``parameter_value`` (``parameter_name`` is
    always ``"options"``), so callers can report the mismatch without
    holding on to the object itself.

    Parameters
    ----------
    component_name : str
        Component that rejected the options, e.g. ``"Clipboard"``.
    expected_type : type
        Options class the component accepts.
    received_type : type
        Class of the object actually passed.
    message : str, optional
        Overrides the generated message.

    """

    def __init__(
        self,
        component_name: str,
        expected_type: type,
        received_type: type,
        message: str | None = None,
    ):
        if message is None:
            message = (
                f"{component_name} expected options of type '{expected_type.__name__}' "
                f"but received '{received_type.__name__}'."
            )
        super().__init__(message, parameter_name="options", parameter_value=received_type)
        self.component_name = component_name
        self.expected_type = expected_type
        self.received_type = received_type


__all__ = ["NotelensError", "ValidationError", "InvalidOptionsError"]
