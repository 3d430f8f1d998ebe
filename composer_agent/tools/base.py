"""Base primitives shared by every composer tool."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Optional, Type

from ..errors import ComposerError, UnknownTool
from ..validation import ToolInput, parameters_schema


@dataclass(frozen=True)
class ToolSpec:
    """Name, description, input schema and handler for one operation."""

    name: str
    description: str
    input_model: Type[ToolInput]
    handler: Callable[[Any], Dict[str, Any]]
    mutates: bool = False

    @property
    def parameters(self) -> Dict[str, Any]:
        return parameters_schema(self.input_model)

    def definition(self) -> Dict[str, Any]:
        """OpenAI function-tool definition for this tool."""

        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": self.parameters,
            },
        }


@dataclass(frozen=True)
class ToolOutcome:
    """Structured result of one dispatch: either ``result`` or ``error`` is set."""

    tool: str
    result: Optional[Dict[str, Any]] = None
    error: Optional[ComposerError] = field(default=None, compare=False)

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def error_code(self) -> Optional[str]:
        return self.error.code if self.error is not None else None

    def to_payload(self) -> Dict[str, Any]:
        if self.error is not None:
            return self.error.to_payload()
        return dict(self.result or {})


class ToolRegistry:
    """Ordered container of tool specs, filled once at startup."""

    def __init__(self, tools: Iterable[ToolSpec] = ()) -> None:
        self._tools: Dict[str, ToolSpec] = {}
        for tool in tools:
            self.register(tool)

    def register(self, tool: ToolSpec) -> None:
        if tool.name in self._tools:
            raise ValueError(f"Tool {tool.name} is already registered")
        self._tools[tool.name] = tool

    def get(self, name: str) -> ToolSpec:
        tool = self._tools.get(name)
        if tool is None:
            raise UnknownTool(name)
        return tool

    def names(self) -> List[str]:
        return list(self._tools)

    def all(self) -> Dict[str, ToolSpec]:
        return dict(self._tools)

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)
