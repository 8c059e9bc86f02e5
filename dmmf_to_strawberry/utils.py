"""
Naming utilities shared by the semantic model and the emitters.
"""

import keyword
import re
from functools import lru_cache

import inflect

# Regex pattern to split text into words, handling camelCase boundaries
_WORD_PATTERN = re.compile(r"[a-z]+|[A-Z]+(?![a-z])|[A-Z][a-z]*|[0-9]+")

_inflect_engine = inflect.engine()


def _normalize_separators(text: str) -> str:
    """Normalize separators (underscores, hyphens) to spaces."""
    return text.replace("_", " ").replace("-", " ")


def _split_into_words(text: str) -> list[str]:
    """Split text into words, handling camelCase boundaries."""
    return _WORD_PATTERN.findall(_normalize_separators(text))


def pascal_case(text: str) -> str:
    """Convert snake_case, camelCase, or space-separated text to PascalCase.

    Unlike a plain capitalize, the tail of each word is preserved so that
    identifiers like "userProfile" keep their inner capitals.

    Examples:
        "first_name" -> "FirstName"
        "userProfile" -> "UserProfile"
        "post" -> "Post"
    """
    if not text:
        return ""
    return "".join(word[0].upper() + word[1:] for word in _split_into_words(text) if word)


def camel_case(text: str) -> str:
    """Convert text to camelCase ("UserProfile" -> "userProfile")."""
    pascal = pascal_case(text)
    if not pascal:
        return ""
    return pascal[0].lower() + pascal[1:]


def snake_case(text: str) -> str:
    """Convert text to snake_case ("findUniqueOrThrow" -> "find_unique_or_throw")."""
    return "_".join(word.lower() for word in _split_into_words(text) if word)


@lru_cache(maxsize=None)
def pluralize(word: str) -> str:
    """Return the plural form of a (Pascal or camel cased) noun.

    A capitalized word is treated as a proper noun by inflect ("Categorys"),
    so the noun is pluralized in lower case and its first letter restored.
    """
    if not word:
        return word
    plural = _inflect_engine.plural_noun(word[0].lower() + word[1:])
    if not plural:
        return word
    return word[0] + plural[1:]


def safe_identifier(name: str) -> str:
    """Escape Python keywords by appending an underscore."""
    if keyword.iskeyword(name):
        return f"{name}_"
    return name
