"""Base classes shared by every tool exposed by the server."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from functools import cached_property
from typing import Any


class ToolError(Exception):
    """Base class for errors a tool reports back to the caller as text."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message: str = message


@dataclass
class ToolExecResult:
    """Intermediate result of a tool execution."""

    output: str | None = None
    error: str | None = None
    error_code: int = 0


@dataclass
class ToolParameter:
    """A single parameter of a tool's input schema."""

    name: str
    type: str | list[str]
    description: str
    enum: list[str] | None = None
    items: dict[str, Any] | None = None
    required: bool = True


# Arguments passed to Tool.execute. Keys starting with "_" are injected by the
# server (for example "_nav_context") and are never part of the public schema.
ToolCallArguments = dict[str, Any]


class Tool(ABC):
    """Base class for all tools."""

    @cached_property
    def parameters(self) -> list[ToolParameter]:
        return self.get_parameters()

    @abstractmethod
    def get_name(self) -> str:
        pass

    @abstractmethod
    def get_description(self) -> str:
        pass

    @abstractmethod
    def get_parameters(self) -> list[ToolParameter]:
        pass

    @abstractmethod
    async def execute(self, arguments: ToolCallArguments) -> ToolExecResult:
        pass

    def get_input_schema(self) -> dict[str, object]:
        """Get the input schema for the tool."""
        schema: dict[str, object] = {"type": "object"}
        properties: dict[str, dict[str, object]] = {}
        required: list[str] = []

        for param in self.parameters:
            param_schema: dict[str, object] = {
                "type": param.type,
                "description": param.description,
            }
            if param.enum:
                param_schema["enum"] = param.enum
            if param.items:
                param_schema["items"] = param.items

            properties[param.name] = param_schema
            if param.required:
                required.append(param.name)

        schema["properties"] = properties
        if required:
            schema["required"] = required
        return schema
