from .errors import ConverterError, UnknownLanguageError
from .languages import LANGUAGES, get_language
from .registry import supported_pairs, translate

__all__ = [
    'ConverterError',
    'UnknownLanguageError',
    'LANGUAGES',
    'get_language',
    'supported_pairs',
    'translate',
]
