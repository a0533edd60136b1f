"""
Error types raised at the scoring boundary, plus message extraction.
"""


class ScoringError(Exception):
    """Base class for errors raised by the scoring service."""


class ScanNotFoundError(ScoringError):
    """The scan being scored does not exist in the repository."""

    def __init__(self, scan_id: str) -> None:
        super().__init__(f"Scan {scan_id} not found")
        self.scan_id = scan_id


def get_error_message(error: BaseException | object) -> str:
    """
    Safely extract an error message from an unknown error type.
    """
    if isinstance(error, Exception):
        return str(error) or type(error).__name__
    return "Unknown error"
