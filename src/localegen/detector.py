import re

from localegen.classes import FormattedString, SimpleString

ESCAPE_REGEX = re.compile(r"\\([\"'nt])")
ESCAPES = {'"': '"', "'": "'", "n": "\n", "t": "\t"}

# %% is matched too so a literal percent is consumed before it can start a token
PLACEHOLDER_REGEX = re.compile(r"%(?:[0-9]+\$)?[diouxXeEfFgGaAcspn%]")


def unescape(text: str) -> str:
    return ESCAPE_REGEX.sub(lambda match: ESCAPES[match.group(1)], text)


def find_placeholders(value: str) -> tuple[str, ...]:
    """Return the distinct placeholder tokens of ``value`` in first-seen order."""
    tokens: dict[str, None] = {}
    for match in PLACEHOLDER_REGEX.finditer(value):
        token = match.group(0)
        if token != "%%":
            tokens.setdefault(token)
    return tuple(tokens)


def classify(key: str, value: str) -> SimpleString | FormattedString:
    format_args = find_placeholders(value)
    if format_args:
        return FormattedString(key, value, format_args)
    return SimpleString(key, value)
