"""
Minimal English inflection used to derive default names and paths
(``articles`` -> ``Article``, ``UserGroup`` -> ``/user_groups``).
Only the regular rules plus a handful of common irregulars are covered.
"""
import re
import typing

_IRREGULARS: typing.Sequence[typing.Tuple[str, str]] = (
    ("person", "people"),
    ("child", "children"),
    ("man", "men"),
    ("woman", "women"),
    ("mouse", "mice"),
)

_UNCOUNTABLES = frozenset(
    ["equipment", "information", "money", "series", "species", "news", "data", "metadata"]
)

# singular words ending in s that take -es, and -sis words that become -ses
_S_WORDS = r"(alias|status|bus|virus|campus|census|bonus)"
_SIS_WORDS = r"(analy|diagno|parenthe|progno|synop|the|cri|hypothe|empha)"


def _ends_with_word(lowered: str, word: str) -> bool:
    return lowered == word or lowered.endswith("_" + word)


def _replace_tail(word: str, length: int, replacement: str) -> str:
    tail = word[len(word) - length :]
    if tail[:1].isupper():
        replacement = replacement[:1].upper() + replacement[1:]
    return word[: len(word) - length] + replacement


def pluralize(word: str) -> str:
    if not word or word.lower() in _UNCOUNTABLES:
        return word
    lowered = word.lower()
    for singular, plural in _IRREGULARS:
        if _ends_with_word(lowered, singular):
            return _replace_tail(word, len(singular), plural)
        if _ends_with_word(lowered, plural):
            return word
    if re.search(_S_WORDS + "$", lowered):
        return word + "es"
    if re.search(_SIS_WORDS + "sis$", lowered):
        return word[:-2] + "es"
    if re.search(r"[^aeiou]y$", lowered):
        return word[:-1] + "ies"
    if re.search(r"(x|z|ch|sh|ss)$", lowered):
        return word + "es"
    if lowered.endswith("s"):
        # assumed to already be plural
        return word
    return word + "s"


def singularize(word: str) -> str:
    if not word or word.lower() in _UNCOUNTABLES:
        return word
    lowered = word.lower()
    for singular, plural in _IRREGULARS:
        if _ends_with_word(lowered, plural):
            return _replace_tail(word, len(plural), singular)
        if _ends_with_word(lowered, singular):
            return word
    if re.search(_S_WORDS + "(es)?$", lowered):
        return word[:-2] if lowered.endswith("es") else word
    if re.search(_SIS_WORDS + "(sis|ses)$", lowered):
        return word[:-2] + "is"
    if lowered.endswith("ies") and len(word) > 3:
        return word[:-3] + "y"
    if re.search(r"(x|z|ch|sh|ss)es$", lowered):
        return word[:-2]
    if lowered.endswith("ss"):
        return word
    if lowered.endswith("s"):
        return word[:-1]
    return word


def underscore(word: str) -> str:
    word = re.sub(r"([A-Z]+)([A-Z][a-z])", r"\1_\2", word)
    word = re.sub(r"([a-z\d])([A-Z])", r"\1_\2", word)
    return word.replace("-", "_").lower()


def camelize(word: str) -> str:
    return "".join(part[:1].upper() + part[1:] for part in word.split("_") if part)


def tableize(class_name: str) -> str:
    """``"UserGroup"`` -> ``"user_groups"``"""
    return pluralize(underscore(class_name))


def classify(name: str) -> str:
    """``"user_groups"`` -> ``"UserGroup"``"""
    return camelize(singularize(name))
