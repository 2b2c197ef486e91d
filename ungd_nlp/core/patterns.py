from __future__ import annotations
import fnmatch
import re
from typing import Callable, Iterable, Literal

from ungd_nlp.messages import analysis_messages as msg
from ungd_nlp.utils.exceptions import InvalidConfigurationError

ValueType = Literal["regex", "fixed", "glob"]


def compile_matcher(
    patterns: Iterable[str],
    valuetype: ValueType = "regex",
    case_insensitive: bool = True,
) -> Callable[[str], bool]:
    """
    Build a predicate telling whether a token matches any of ``patterns``.

    regex: re.search semantics (a match anywhere in the token)
    fixed: whole-token equality
    glob:  whole-token match with ``*`` and ``?`` wildcards
    """
    patterns = [str(p) for p in patterns]
    if valuetype == "fixed":
        if case_insensitive:
            fixed = {p.casefold() for p in patterns}
            return lambda tok: tok.casefold() in fixed
        fixed = set(patterns)
        return lambda tok: tok in fixed

    if valuetype == "glob":
        sources = [fnmatch.translate(p) for p in patterns]
    elif valuetype == "regex":
        sources = patterns
    else:
        raise InvalidConfigurationError(
            msg.UNKNOWN_VALUETYPE.format(valuetype=valuetype)
        )

    flags = re.IGNORECASE if case_insensitive else 0
    compiled = []
    for src, original in zip(sources, patterns):
        try:
            compiled.append(re.compile(src, flags))
        except re.error as e:
            raise InvalidConfigurationError(
                msg.INVALID_PATTERN.format(pattern=original, error=e)
            ) from e

    if valuetype == "glob":
        return lambda tok: any(rx.match(tok) for rx in compiled)
    return lambda tok: any(rx.search(tok) for rx in compiled)
