"""Common type aliases for parser structures."""

from __future__ import annotations

from typing import Any, Callable

ImageList = list[str]
SelectorList = list[str]

# Predicate deciding whether a candidate's inner markup is usable.
ContentPredicate = Callable[[str], bool]
ContentRule = tuple[str, ContentPredicate]
ContentRuleList = list[ContentRule]

OutcomeDict = dict[str, Any]
