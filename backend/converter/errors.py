"""Exceptions raised by the converter package."""


class ConverterError(Exception):
    """Base exception for converter errors"""

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class UnknownLanguageError(ConverterError):
    """Raised when a language tag is not in the catalogue"""

    def __init__(self, tag: str):
        self.tag = tag
        super().__init__(f"Unknown language '{tag}'")
