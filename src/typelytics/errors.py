"""Exception hierarchy for query construction and execution."""


class TypelyticsError(Exception):
    """Base class for all errors raised by this package."""


class ConfigurationError(TypelyticsError):
    """Raised when the client cannot resolve its required configuration."""

    def __init__(self, message: str, setting: str | None = None) -> None:
        """Initialize configuration error.

        Args:
            message: Error description.
            setting: Name of the missing or invalid setting.
        """
        super().__init__(message)
        self.setting = setting


class QueryValidationError(TypelyticsError):
    """Raised when a query is rejected before any network call is made."""

    def __init__(
        self,
        message: str,
        event: str | None = None,
        sampling: str | None = None,
    ) -> None:
        """Initialize validation error.

        Args:
            message: Error description.
            event: Event name of the offending series, if any.
            sampling: Sampling selector that caused the rejection, if any.
        """
        super().__init__(message)
        self.event = event
        self.sampling = sampling


class UnknownEventError(QueryValidationError):
    """Raised when a series references an event missing from the catalog."""


class UnknownPropertyError(QueryValidationError):
    """Raised when a filter or series references an undeclared property."""

    def __init__(self, message: str, prop: str, event: str | None = None) -> None:
        """Initialize unknown property error.

        Args:
            message: Error description.
            prop: The property name that could not be resolved.
            event: Event whose property list was consulted, if any.
        """
        super().__init__(message, event=event)
        self.property = prop


class TrendRequestError(TypelyticsError):
    """Raised when the trend endpoint answers with a non-success status."""

    def __init__(
        self,
        message: str,
        status_code: int,
        status_text: str,
        body: object = None,
    ) -> None:
        """Initialize transport error.

        Args:
            message: Error description including the status text.
            status_code: HTTP status code of the response.
            status_text: HTTP reason phrase of the response.
            body: Parsed JSON error body, or raw text when parsing failed.
        """
        super().__init__(message)
        self.status_code = status_code
        self.status_text = status_text
        self.body = body
