class ClassifierError(Exception):
    """The remote classifier call failed as a whole."""


class ClassifierNotConfigured(ClassifierError):
    """No credential is available for the remote classifier."""


class IngestionError(Exception):
    """An uploaded file could not be turned into texts."""


class UnsupportedFormatError(IngestionError):
    """The uploaded file is not .txt, .json or .csv."""
