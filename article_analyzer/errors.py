"""Exception types shared across the analyzer."""


class AnalyzerError(Exception):
    """Base class for analyzer failures."""


class InitializationError(AnalyzerError):
    """Raised when a required identity cannot be resolved before a run starts."""
