"""Error types raised while resolving and rendering widgets."""

from __future__ import annotations


class WidgetError(Exception):
    """Base error for all widget failures.

    ``widget`` names the widget being rendered; dispatch fills it in when the
    error was raised below it.
    """

    def __init__(self, message: str, widget: str | None = None):
        self.message = message
        self.widget = widget
        super().__init__(message)

    def __str__(self) -> str:
        if self.widget:
            return f"{self.widget}: {self.message}"
        return self.message


class UnknownWidget(WidgetError):
    """Raised when a widget identifier is not in the vocabulary."""

    def __init__(self, name: str, service: str):
        self.name = name
        self.service = service
        super().__init__(f"can't find the widget {name} for service {service}")


class InvalidNumber(WidgetError):
    """Raised when a numeric option can't be parsed or is out of range."""

    def __init__(self, key: str, value: str, reason: str = "must be a number"):
        self.key = key
        self.value = value
        super().__init__(f"{value!r} {reason} (option {key})")


class MalformedDateExpression(WidgetError):
    """Raised when a relative date doesn't match the expected shape."""

    def __init__(
        self,
        expression: str,
        expected: str,
        widget: str | None = None,
        key: str | None = None,
    ):
        self.expression = expression
        self.expected = expected
        self.key = key
        option = f" (option {key})" if key else ""
        super().__init__(
            f"invalid date expression {expression!r}{option}, expected {expected}",
            widget=widget,
        )


class ProviderError(WidgetError):
    """Raised when the metrics provider fails. The original error is the cause."""

    def __init__(self, cause: BaseException, widget: str | None = None):
        self.cause = cause
        super().__init__(f"provider error: {cause}", widget=widget)


class DisplayError(WidgetError):
    """Raised when the display surface fails. The original error is the cause."""

    def __init__(self, cause: BaseException, widget: str | None = None):
        self.cause = cause
        super().__init__(f"display error: {cause}", widget=widget)
