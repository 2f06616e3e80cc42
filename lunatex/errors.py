# lunatex/errors.py


class ConversionError(Exception):
    """Base class for every failure that aborts a .tns conversion."""


class UnsupportedInputError(ConversionError):
    """The input file extension does not map to a known content kind."""


class ContainerError(ConversionError):
    """Content cannot be packed into the TI container (bad name, bad deflate data, ...)."""


class EncryptionError(ConversionError):
    pass


class ConfigError(ConversionError):
    """The note style file is missing, is not YAML, or fails validation."""
