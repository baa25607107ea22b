"""Exception hierarchy for churn scoring."""


class ChurnPredictionError(Exception):
    """Base class for all scoring errors."""


class ValidationError(ChurnPredictionError, ValueError):
    """Input cannot be scored."""


class FormatError(ValidationError):
    """CSV text is missing a header or data rows."""


class EmptyInputError(ValidationError):
    """A batch run was given no customer records."""


class ConfigurationError(ChurnPredictionError, ValueError):
    """A model registry or run configuration is unusable."""
