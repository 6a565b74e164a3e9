"""Step content variants.

A step's content is exactly one of three shapes, distinguished by the
``kind`` discriminant rather than by inspecting the value:

    TextContent       a single block of text (script summary, description)
    ListContent       an ordered list of strings (hooks, tags)
    SelectionResult   generated alternatives plus the chosen one (titles)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar, Literal


@dataclass(frozen=True)
class TextContent:
    """A single block of text."""

    kind: ClassVar[Literal["text"]] = "text"

    text: str

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "text": self.text}


@dataclass(frozen=True)
class ListContent:
    """An ordered list of strings."""

    kind: ClassVar[Literal["list"]] = "list"

    items: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        # Accept any sequence but store an immutable copy
        object.__setattr__(self, "items", tuple(self.items))

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "items": list(self.items)}


@dataclass(frozen=True)
class SelectionResult:
    """A set of candidates plus the one picked from them.

    Invariant: ``chosen`` is None or a member of ``alternatives``.
    """

    kind: ClassVar[Literal["selection"]] = "selection"

    alternatives: tuple[str, ...]
    chosen: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "alternatives", tuple(self.alternatives))
        if self.chosen is not None and self.chosen not in self.alternatives:
            raise ValueError(f"Chosen value {self.chosen!r} is not one of the alternatives")

    def with_choice(self, chosen: str) -> SelectionResult:
        """Return a copy with ``chosen`` set, sharing the same alternatives."""
        return SelectionResult(alternatives=self.alternatives, chosen=chosen)

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind,
            "alternatives": list(self.alternatives),
            "chosen": self.chosen,
        }


StepContent = TextContent | ListContent | SelectionResult
