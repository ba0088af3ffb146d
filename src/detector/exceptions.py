class DetectorError(Exception):
    pass


class NotFoundError(DetectorError):
    """Token metadata could not be resolved."""

    def __init__(self, identifier: str) -> None:
        super().__init__(f"Token not found or invalid: {identifier}")
        self.identifier = identifier


class SubAnalyzerError(DetectorError):
    """A chain, social or code analyzer failed (upstream error, timeout, bad data)."""
