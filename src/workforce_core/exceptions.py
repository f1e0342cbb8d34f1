"""Domain-specific exceptions for Workforce Core.

This module defines custom exceptions that are part of the public API.
All exceptions inherit from WorkforceAPIError for easy catching.
"""


class WorkforceAPIError(Exception):
    """Base exception for all Workforce Core errors.

    Users can catch this exception to handle any Workforce Core error.
    """

    pass


class ConfigError(WorkforceAPIError):
    """Raised when there is a configuration error.

    This exception is raised when:
    - Invalid configuration values are provided
    - An unknown processing mode is requested
    """

    pass


class DataQualityError(WorkforceAPIError):
    """Raised when input data fails validation.

    This exception is raised when:
    - Required columns are missing from an input table
    """

    pass


class DataIntegrityError(WorkforceAPIError):
    """Raised when an aggregate violates a structural invariant.

    This exception is raised when:
    - An average process time is zero, negative or not finite, which
      would make the required register count infinite or NaN
    """

    pass


class ETLError(WorkforceAPIError):
    """Raised when a mart build stage fails.

    This exception is raised when:
    - No bronze input files are found for a requested window
    - Building or writing a mart fails
    """

    pass
