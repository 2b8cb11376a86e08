"""Validation report model: field paths mapped to ordered error messages.

A ValidationMap is created empty for every validator chain, grows while the
chain runs and is handed out as a copy once the chain is finalized.
"""

import json
from typing import Iterator, Optional

from pydantic import Field, RootModel, field_serializer

from fluentcheck.config import get_settings


class ValidationMap(RootModel[dict[str, list[str]]]):
    """Field path -> error messages, in the order the constraints produced them."""

    root: dict[str, list[str]] = Field(default_factory=dict)

    def record(self, path: str, message: str) -> None:
        """Append a message under ``path``, creating the entry on first use."""
        self.root.setdefault(path, []).append(message)

    def merge(self, other: "ValidationMap") -> None:
        """Add all entries of ``other``; message lists are concatenated on key collision."""
        for path, messages in other.items():
            self.root.setdefault(path, []).extend(messages)

    def is_empty(self) -> bool:
        return not self.root

    def copy(self) -> "ValidationMap":
        """Independent snapshot; later changes to either map don't affect the other."""
        return ValidationMap({path: list(messages) for path, messages in self.root.items()})

    def as_dict(self) -> dict[str, list[str]]:
        return {path: list(messages) for path, messages in self.root.items()}

    # ── Mapping protocol ──

    def __getitem__(self, path: str) -> list[str]:
        return self.root[path]

    def __contains__(self, path: object) -> bool:
        return path in self.root

    def __iter__(self) -> Iterator[str]:  # type: ignore[override]
        return iter(self.root)

    def __len__(self) -> int:
        return len(self.root)

    def keys(self):
        return self.root.keys()

    def items(self):
        return self.root.items()

    def get(self, path: str, default: Optional[list[str]] = None) -> Optional[list[str]]:
        return self.root.get(path, default)

    # ── Rendering ──

    @field_serializer("root")
    def _sorted_root(self, root: dict[str, list[str]]) -> dict[str, list[str]]:
        return {path: root[path] for path in sorted(root)}

    def render(self, indent: Optional[int] = None) -> str:
        """Deterministic JSON form, keys sorted."""
        return self.model_dump_json(indent=get_settings().REPORT_INDENT if indent is None else indent)

    @classmethod
    def parse(cls, text: str) -> "ValidationMap":
        """Inverse of ``render()``."""
        return cls.model_validate_json(text)

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return f"ValidationMap({json.dumps(self.as_dict(), sort_keys=True)})"
