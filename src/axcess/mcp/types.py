"""MCP types for axcess.

Frozen dataclasses describing the tools the MCP server exposes and the
results those tools hand back.
"""

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any


class ToolInputType(StrEnum):
    """JSON Schema types for tool input parameters."""

    STRING = "string"
    NUMBER = "number"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    ARRAY = "array"
    OBJECT = "object"


_PYTHON_TYPES: dict[ToolInputType, Any] = {
    ToolInputType.STRING: str,
    ToolInputType.NUMBER: float,
    ToolInputType.INTEGER: int,
    ToolInputType.BOOLEAN: bool,
    ToolInputType.ARRAY: list[Any],
    ToolInputType.OBJECT: dict[str, Any],
}


@dataclass(frozen=True, slots=True)
class MCPToolParameter:
    """A single parameter for an MCP tool.

    Attributes:
        name: Parameter name.
        type: JSON Schema type of the parameter.
        description: Human-readable description.
        required: Whether the parameter is required.
        enum: Allowed values if restricted.
        properties: Fields of an object parameter, or of each item of an
            array parameter.
    """

    name: str
    type: ToolInputType
    description: str = ""
    required: bool = False
    enum: tuple[str, ...] | None = None
    properties: tuple["MCPToolParameter", ...] = ()

    @property
    def python_type(self) -> Any:
        """Python annotation used when the tool is registered with FastMCP."""
        base = _PYTHON_TYPES[self.type]
        return base if self.required else base | None

    def to_schema(self) -> dict[str, Any]:
        schema: dict[str, Any] = {"type": self.type.value}
        if self.description:
            schema["description"] = self.description
        if self.enum is not None:
            schema["enum"] = list(self.enum)
        if self.properties:
            nested = _object_schema(self.properties)
            if self.type is ToolInputType.ARRAY:
                schema["items"] = nested
            else:
                schema.update(nested)
        return schema


def _object_schema(parameters: tuple[MCPToolParameter, ...]) -> dict[str, Any]:
    return {
        "type": "object",
        "properties": {param.name: param.to_schema() for param in parameters},
        "required": [param.name for param in parameters if param.required],
        "additionalProperties": False,
    }


@dataclass(frozen=True, slots=True)
class MCPToolDefinition:
    """Definition of an MCP tool.

    Attributes:
        name: Unique tool name (e.g., "delegate.run").
        description: Human-readable description.
        parameters: Top-level tool parameters.
    """

    name: str
    description: str
    parameters: tuple[MCPToolParameter, ...] = field(default_factory=tuple)

    def to_input_schema(self) -> dict[str, Any]:
        """Return the JSON Schema describing the tool's input."""
        return _object_schema(self.parameters)


@dataclass(frozen=True, slots=True)
class MCPToolResult:
    """Result from an MCP tool invocation.

    Attributes:
        text: Text content returned to the client.
        is_error: Whether the tool call failed.
        meta: JSON-serializable metadata (rationale, usage, cost, attempts,
            or the error payload).
    """

    text: str
    is_error: bool = False
    meta: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class MCPServerInfo:
    """Information about the MCP server."""

    name: str
    version: str
    tools: tuple[MCPToolDefinition, ...] = field(default_factory=tuple)
