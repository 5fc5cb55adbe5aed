class StallError(Exception):
    """Base class for errors raised by the stall backend."""


class UnsupportedFileType(StallError):
    def __init__(self, filename: str):
        self.filename = filename
        super().__init__("Unsupported file type")


class SpreadsheetError(StallError):
    """The uploaded file has a supported extension but could not be parsed."""


class MirrorError(StallError):
    """Reading or writing the flat-file sales mirror failed."""
