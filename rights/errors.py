"""Error taxonomy for rights evaluation.

Two kinds of failure exist before or around evaluation:

- ``InputValidationError``: the user left a required field empty or supplied a
  value outside the calculator's enum space. Caught before evaluation and shown
  as an inline form message.
- ``ConfigurationError``: a jurisdiction/category pair has no rule table entry,
  or a table was built with overlapping tiers. Always loud.
"""


class RightsError(Exception):
    """Base class for rights-evaluation errors."""


class InputValidationError(RightsError):
    """A form submission failed validation; evaluation must not run."""

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field
        self.message = message


class ConfigurationError(RightsError):
    """A rule table is missing an entry or is malformed."""
