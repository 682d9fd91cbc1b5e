"""Custom exceptions for license-notice."""


class LicenseNoticeError(Exception):
    """Base exception for all license-notice errors."""

    pass


class ConfigurationError(LicenseNoticeError):
    """Exception raised when configuration is invalid."""

    pass


class GraphLoadError(LicenseNoticeError):
    """Exception raised when a license graph file cannot be loaded."""

    pass


class GraphIncomplete(LicenseNoticeError):
    """Exception raised when the graph references targets it does not contain."""

    pass


class RootNotFound(GraphIncomplete):
    """Exception raised when a requested root is absent from the graph."""

    def __init__(self, root: str) -> None:
        super().__init__(f"root target '{root}' not found in license graph")
        self.root = root


class CycleDetected(LicenseNoticeError):
    """Exception raised when traversal fails to terminate on a cycle.

    Visited-state tracking breaks cycles, so this signals an internal
    invariant violation rather than a property of the input graph.
    """

    def __init__(self, trail: list[str]) -> None:
        super().__init__(
            "dependency traversal did not terminate: " + " -> ".join(trail)
        )
        self.trail = trail


class LicenseTextError(LicenseNoticeError):
    """Exception raised when a referenced license text cannot be read."""

    pass
