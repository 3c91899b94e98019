"""Exceptions raised by the search pipeline."""


class AwsSearchError(Exception):
    """Base class for all errors raised by awssearch"""


class UpstreamFailure(AwsSearchError):
    """An AWS list or tag lookup call failed; no partial results are kept."""

    def __init__(self, operation: str, error: Exception) -> None:
        self.operation = operation
        self.error = error
        super().__init__(f"{operation} failed: {error}")


class AmbiguousNarrowing(AwsSearchError):
    """A view that needs exactly one resource matched zero or several."""

    def __init__(self, count: int) -> None:
        self.count = count
        super().__init__("need to be narrowed to 1")


class UnsupportedOutputFormat(AwsSearchError):
    def __init__(self, output_format: str) -> None:
        self.output_format = output_format
        super().__init__(f"Unsupported output format: {output_format}")
