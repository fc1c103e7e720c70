# herd/exceptions.py

"""Exception hierarchy for relationship evaluation."""


class HerdException(Exception):
    """Base exception for all relationship errors."""

    pass


# Configuration Exceptions
class ConfigurationException(HerdException):
    """Base exception for invalid relationship configuration."""

    pass


class MetricFamilyMismatch(ConfigurationException):
    """Raised when a metric is applied to a family it does not belong to."""

    def __init__(self, metric, family):
        self.metric = metric
        self.family = family
        super().__init__(f"Metric '{metric}' is not valid for family {family}")


class InvalidBoundsError(ConfigurationException):
    """Raised for bounds that cannot form a range: min >= max, or a non-finite bound."""

    pass


# Event Handler Exceptions
class EventHandlerException(HerdException):
    """Base exception for event handler operations."""

    pass


class HandlerExecutionError(EventHandlerException):
    """Raised when an event handler fails during execution."""

    pass
