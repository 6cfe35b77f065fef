"""
Exception types raised at the configuration and transport seams.

The pipeline itself never lets these escape: it turns them into failure
results so the host only ever sees a label list (possibly empty).
"""


class TaggerError(Exception):
    """Base class for all tagger errors."""


class ConfigurationError(TaggerError):
    """Raised when a configuration file or option cannot be used."""


class TransportError(TaggerError):
    """Raised when the model endpoint could not be reached or returned an error status."""


class MalformedResponseError(TransportError):
    """Raised when the model endpoint answered but the payload carried no usable text."""
