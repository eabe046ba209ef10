"""Exception taxonomy for dashboard operations.

Each error carries the HTTP status it maps to. Upstream transport errors are
raised by httpx directly and mapped to a generic 500 in ``main.py``.
"""


class DashboardError(Exception):
    """Base class for dashboard errors."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidRequestError(DashboardError):
    """Request failed validation before any upstream call.

    Examples: missing comment text, unsupported upload type, oversized file.
    """

    status_code = 400


class SectionNotFoundError(DashboardError):
    """Target heading section is absent from the page."""

    status_code = 404

    def __init__(self, section_name: str, message: str | None = None):
        super().__init__(message or f"{section_name} section not found")
        self.section_name = section_name


class UpstreamError(DashboardError):
    """Notion returned something unusable (e.g. an append with no results)."""

    status_code = 500
