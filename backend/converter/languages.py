"""The fixed catalogue of language tags the converter knows about."""

from typing import Dict, List, NamedTuple

from .errors import UnknownLanguageError


class Language(NamedTuple):
    tag: str
    display_name: str
    line_comment: str


LANGUAGES: List[Language] = [
    Language('javascript', 'JavaScript', '//'),
    Language('python', 'Python', '#'),
    Language('java', 'Java', '//'),
    Language('csharp', 'C#', '//'),
    Language('cpp', 'C++', '//'),
    Language('php', 'PHP', '//'),
    Language('ruby', 'Ruby', '#'),
    Language('swift', 'Swift', '//'),
    Language('kotlin', 'Kotlin', '//'),
    Language('go', 'Go', '//'),
    Language('rust', 'Rust', '//'),
    Language('typescript', 'TypeScript', '//'),
    Language('scala', 'Scala', '//'),
    Language('dart', 'Dart', '//'),
    Language('r', 'R', '#'),
    Language('perl', 'Perl', '#'),
    Language('haskell', 'Haskell', '--'),
    Language('bash', 'Bash', '#'),
]

_BY_TAG: Dict[str, Language] = {language.tag: language for language in LANGUAGES}


def get_language(tag: str) -> Language:
    """Look up a language by tag, raising UnknownLanguageError if it is not catalogued."""
    try:
        return _BY_TAG[tag]
    except KeyError:
        raise UnknownLanguageError(tag) from None


def is_known(tag: str) -> bool:
    return tag in _BY_TAG


def comment_marker(tag: str) -> str:
    """Single-line comment marker for a tag; `//` for anything uncatalogued."""
    language = _BY_TAG.get(tag)
    return language.line_comment if language else '//'
