"""Built-in rule catalog in declaration order."""

from __future__ import annotations

from typing import List, Tuple

from . import Rule
from . import empty_catch, hardcoded_secret, missing_braces, missing_doc, todo_marker

RULE_MODULES = (missing_braces, hardcoded_secret, todo_marker, empty_catch, missing_doc)


def default_rules() -> List[Rule]:
    return [module.get_rule() for module in RULE_MODULES]


BUILTIN_RULE_IDS: Tuple[str, ...] = tuple(rule.id for rule in default_rules())
