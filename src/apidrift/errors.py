"""Exception types raised by apidrift.

Only malformed input is an error. Lookup misses (endpoint not in the
contract, no stored history) are ordinary states and never raise.
"""

from __future__ import annotations


class ApiDriftError(Exception):
    """Base class for apidrift failures."""


class TrafficValidationError(ApiDriftError, ValueError):
    """Traffic input is not a non-empty array of well-formed samples."""


class SpecLoadError(ApiDriftError):
    """The contract document could not be read or parsed."""
