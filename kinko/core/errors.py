"""Exception types raised by the transcription core."""


class KinkoError(Exception):
    """Base class for all transcription errors."""


class InputError(KinkoError, ValueError):
    """The audio handed to the pipeline violates a precondition."""


class ConfigurationError(KinkoError, ValueError):
    """A configuration value is out of range or inconsistent."""
