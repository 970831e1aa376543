"""
Prompt templates with literal ``{name}`` substitution.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Sequence

_PLACEHOLDER = re.compile(r"\{([A-Za-z_][A-Za-z0-9_]*)\}")


@dataclass(frozen=True)
class PromptTemplate:
    """
    Text with ``{name}`` placeholders.

    ``format`` replaces each placeholder whose name is supplied; placeholders
    without a value stay in the output verbatim. Substitution is a single
    pass over the template: braces inside a supplied value are never
    expanded. There are no loops, conditionals or escapes.
    """

    template: str
    input_variables: Sequence[str] = ()

    def format(self, variables: Mapping[str, Any]) -> str:
        def substitute(match: "re.Match[str]") -> str:
            name = match.group(1)
            return str(variables[name]) if name in variables else match.group(0)

        return _PLACEHOLDER.sub(substitute, self.template)

    def placeholders(self) -> List[str]:
        """Names referenced by the template, in order of first appearance."""
        seen: List[str] = []
        for match in _PLACEHOLDER.finditer(self.template):
            if match.group(1) not in seen:
                seen.append(match.group(1))
        return seen

    def missing_variables(self, variables: Mapping[str, Any]) -> List[str]:
        expected = list(self.input_variables) or self.placeholders()
        return [name for name in expected if name not in variables]


@dataclass(frozen=True)
class PromptValue:
    """A rendered prompt plus free-form metadata."""

    text: str
    metadata: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_template(cls, template: PromptTemplate, variables: Mapping[str, Any]) -> "PromptValue":
        return cls(text=template.format(variables))

    def __str__(self) -> str:
        return self.text
