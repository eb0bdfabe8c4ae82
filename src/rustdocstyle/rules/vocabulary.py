# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Word lists backing the heuristic summary-line checks.

The tables are kept apart from the rule logic so they can be extended
without touching control flow. They are deliberately small: imperative mood
detection is a heuristic, not a grammatical analysis.
"""

from __future__ import annotations

from typing import Final

DISCOURSE_MARKERS: Final[frozenset[str]] = frozenset({"this", "the", "a", "an"})

# Third-person lead verbs that commonly open descriptive (non-imperative) summaries.
LEAD_VERBS: Final[frozenset[str]] = frozenset(
    {
        "returns",
        "gets",
        "creates",
        "makes",
        "builds",
        "sets",
        "computes",
        "calculates",
        "checks",
        "constructs",
        "converts",
        "generates",
        "handles",
        "initializes",
        "parses",
        "provides",
        "represents",
        "yields",
    },
)

IMPERATIVE_VERBS: Final[frozenset[str]] = frozenset(
    {
        "accept",
        "access",
        "acquire",
        "activate",
        "add",
        "adjust",
        "aggregate",
        "allocate",
        "allow",
        "append",
        "apply",
        "assert",
        "assign",
        "attach",
        "attempt",
        "await",
        "begin",
        "bind",
        "block",
        "borrow",
        "build",
        "calculate",
        "call",
        "cancel",
        "cast",
        "change",
        "check",
        "clean",
        "clear",
        "clone",
        "close",
        "collect",
        "combine",
        "compare",
        "compile",
        "compute",
        "configure",
        "connect",
        "consume",
        "contain",
        "convert",
        "copy",
        "count",
        "create",
        "decode",
        "define",
        "delete",
        "derive",
        "describe",
        "deserialize",
        "destroy",
        "detect",
        "determine",
        "disable",
        "dispatch",
        "display",
        "do",
        "drain",
        "drop",
        "emit",
        "enable",
        "encode",
        "ensure",
        "enter",
        "evaluate",
        "execute",
        "exit",
        "expand",
        "export",
        "extend",
        "extract",
        "fail",
        "fetch",
        "fill",
        "filter",
        "find",
        "finish",
        "flush",
        "fold",
        "format",
        "free",
        "generate",
        "get",
        "give",
        "grow",
        "handle",
        "hash",
        "hold",
        "ignore",
        "implement",
        "import",
        "include",
        "increment",
        "indicate",
        "initialize",
        "insert",
        "inspect",
        "install",
        "invoke",
        "iterate",
        "join",
        "keep",
        "launch",
        "list",
        "load",
        "lock",
        "log",
        "look",
        "make",
        "map",
        "mark",
        "match",
        "merge",
        "migrate",
        "modify",
        "move",
        "normalize",
        "notify",
        "open",
        "override",
        "parse",
        "pass",
        "perform",
        "pop",
        "prepare",
        "print",
        "process",
        "produce",
        "provide",
        "push",
        "put",
        "query",
        "raise",
        "read",
        "receive",
        "record",
        "reduce",
        "refresh",
        "register",
        "release",
        "reload",
        "remove",
        "rename",
        "render",
        "replace",
        "report",
        "represent",
        "request",
        "require",
        "reset",
        "resolve",
        "restore",
        "retrieve",
        "return",
        "reverse",
        "run",
        "save",
        "scan",
        "search",
        "select",
        "send",
        "serialize",
        "set",
        "show",
        "shut",
        "skip",
        "sort",
        "spawn",
        "split",
        "start",
        "stop",
        "store",
        "strip",
        "subscribe",
        "swap",
        "take",
        "test",
        "toggle",
        "transform",
        "translate",
        "trim",
        "try",
        "turn",
        "unlock",
        "unwrap",
        "update",
        "use",
        "validate",
        "verify",
        "visit",
        "wait",
        "walk",
        "wrap",
        "write",
        "yield",
    },
)

# Words ending in "s" that are not third-person verb forms.
NON_VERB_S_WORDS: Final[frozenset[str]] = frozenset(
    {
        "address",
        "alias",
        "always",
        "analysis",
        "as",
        "basis",
        "bias",
        "canvas",
        "class",
        "its",
        "less",
        "minus",
        "news",
        "numerous",
        "perhaps",
        "plus",
        "previous",
        "progress",
        "series",
        "status",
        "this",
        "thus",
        "unless",
        "various",
        "whereas",
        "yes",
    },
)

COMMON_TYPES: Final[frozenset[str]] = frozenset(
    {"Option", "Result", "Vec", "Box", "Rc", "Arc", "Some", "None", "Ok", "Err"},
)

_WORD_PUNCTUATION: Final[str] = "`'\"*_()[]{}<>.,;:!?"


def normalize_word(word: str) -> str:
    """Return ``word`` lowercased and stripped of surrounding punctuation."""

    return word.strip(_WORD_PUNCTUATION).lower()


def _third_person_stems(word: str) -> tuple[str, ...]:
    """Return candidate base forms for a word ending in ``-s``."""

    stems: list[str] = []
    if word.endswith("ies") and len(word) > 3:
        stems.append(f"{word[:-3]}y")
    if word.endswith("es") and len(word) > 2:
        stems.append(word[:-2])
    if word.endswith("s") and len(word) > 1:
        stems.append(word[:-1])
    return tuple(stems)


def is_non_imperative(word: str) -> bool:
    """Return ``True`` when ``word`` opens a non-imperative summary.

    Discourse markers and lead verbs are checked first and win over the
    imperative verb list. A third-person ``-s``/``-es``/``-ies`` form of a
    known imperative verb is non-imperative. Any other word passes.

    Args:
        word: First word of a summary line, in any case.

    Returns:
        bool: ``True`` when the word indicates descriptive mood.
    """

    normalized = normalize_word(word)
    if not normalized:
        return False
    if normalized in DISCOURSE_MARKERS or normalized in LEAD_VERBS:
        return True
    if normalized in IMPERATIVE_VERBS or normalized in NON_VERB_S_WORDS:
        return False
    return any(stem in IMPERATIVE_VERBS for stem in _third_person_stems(normalized))


__all__ = [
    "COMMON_TYPES",
    "DISCOURSE_MARKERS",
    "IMPERATIVE_VERBS",
    "LEAD_VERBS",
    "NON_VERB_S_WORDS",
    "is_non_imperative",
    "normalize_word",
]
