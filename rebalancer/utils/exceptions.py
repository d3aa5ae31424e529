"""Custom exceptions for the portfolio rebalancer.

This module defines the exception hierarchy for the application.
"""


class RebalancerError(Exception):
    """Base exception for all rebalancer errors.

    All custom exceptions in the application should inherit from this class.
    """

    pass


class ConfigurationError(RebalancerError):
    """Raised when configuration is invalid or missing.

    Examples:
        - Missing required configuration keys
        - Invalid configuration values
        - Unknown price selector name
    """

    pass


class CalculatorConfigError(ConfigurationError):
    """Raised when rebalance calculator settings are invalid.

    Examples:
        - Non-positive slot size
        - Price selector that is not callable
    """

    pass


class ModelError(RebalancerError):
    """Base exception for model layer errors.

    Parent class for all target-allocation model exceptions.
    """

    pass


class ModelFormatError(ModelError):
    """Raised when a model definition cannot be parsed.

    Examples:
        - Invalid JSON or YAML
        - Missing "assets" mapping
        - Weight that is missing or not a number
    """

    pass


class ModelValidationError(ModelError):
    """Base exception for model rule violations.

    A model that violates any rule is never constructed.
    """

    pass


class EmptyModelError(ModelValidationError):
    """Raised when a model declares no assets."""

    pass


class NonPositiveWeightError(ModelValidationError):
    """Raised when a model contains a negative weight."""

    pass


class EquivalentAlsoPrimaryError(ModelValidationError):
    """Raised when an equivalent symbol is also a top-level model asset."""

    pass


class DuplicateEquivalentOwnershipError(ModelValidationError):
    """Raised when an equivalent symbol is linked to more than one asset."""

    pass


class PortfolioError(RebalancerError):
    """Base exception for portfolio layer errors.

    Parent class for all portfolio-related exceptions.
    """

    pass


class PortfolioFormatError(PortfolioError):
    """Raised when a portfolio snapshot cannot be parsed.

    Examples:
        - Cash amount that is not a number
        - Positions that are not a mapping
    """

    pass


class MarketDataError(RebalancerError):
    """Raised when market price fixtures are malformed.

    Examples:
        - Price entry that is not a mapping
        - Price field that is not a number
    """

    pass
