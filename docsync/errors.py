"""Exception types raised by the synchronizer."""


class DocSyncError(Exception):
    """Base class for synchronizer failures."""


class DataInconsistencyError(DocSyncError):
    """A structural identity could not be derived; continuing would corrupt docs."""


class AssemblyProcessingError(DocSyncError):
    """Wraps a failure raised while processing one assembly or type."""

    def __init__(self, assembly: str, framework: str, message: str) -> None:
        """Record the assembly identity alongside the message."""
        super().__init__(f"Error processing {assembly} ({framework}): {message}")
        self.assembly = assembly
        self.framework = framework
