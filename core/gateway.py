# =============================================================================
# core/gateway.py  —  Tool registry, validation and dispatch
# =============================================================================
#
# HOW IT WORKS (the flow):
#   1. At startup, core/catalog.py registers each ToolDefinition
#   2. A request arrives as (tool name, raw argument dict)
#   3. invoke() looks the tool up          → UnknownTool if absent
#   4. invoke() validates the arguments    → InvalidArguments, no handler call
#   5. invoke() calls the handler with typed keyword arguments
#   6. The handler's ToolResult is returned unchanged
#
# dispatch() is invoke() for hosts: any TriageError becomes a failure
# envelope instead of an exception, so one bad call never takes the
# process down.
#
# REGISTRATION POLICY:
#   Names are unique.  Registering a name twice raises DuplicateTool.
# =============================================================================

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Optional

from core.exceptions import DuplicateTool, TriageError, UnknownTool
from core.models import ToolResult
from core.schema import Schema, to_json_schema, validate_arguments

logger = logging.getLogger(__name__)

Handler = Callable[..., ToolResult]


@dataclass(frozen=True)
class ToolDefinition:
    """A named, schema-described operation."""
    name: str
    title: str
    description: str
    schema: Schema
    handler: Handler = field(compare=False, repr=False)
    read_only: bool = False
    idempotent: bool = False

    def input_schema(self) -> dict[str, Any]:
        return to_json_schema(self.schema)


class ToolGateway:
    """Owns the tool registry and routes validated requests to handlers."""

    def __init__(self):
        self._tools: dict[str, ToolDefinition] = {}

    def register(self, definition: ToolDefinition) -> ToolDefinition:
        if definition.name in self._tools:
            raise DuplicateTool(definition.name)
        self._tools[definition.name] = definition
        logger.debug("Registered tool %s", definition.name)
        return definition

    def register_tool(
        self,
        name: str,
        schema: Schema,
        handler: Handler,
        title: str = "",
        description: str = "",
    ) -> ToolDefinition:
        """Convenience form of :meth:`register`."""
        return self.register(ToolDefinition(
            name=name,
            title=title or name,
            description=description,
            schema=schema,
            handler=handler,
        ))

    def get(self, name: str) -> ToolDefinition:
        try:
            return self._tools[name]
        except KeyError:
            raise UnknownTool(name) from None

    def names(self) -> list[str]:
        return list(self._tools)

    def definitions(self) -> list[ToolDefinition]:
        return list(self._tools.values())

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def invoke(self, name: str, raw_arguments: Optional[Mapping[str, Any]] = None) -> ToolResult:
        """Validate and run one tool.

        Raises:
            UnknownTool: ``name`` is not registered.
            InvalidArguments: the arguments violate the tool's schema.
            TriageError: whatever the handler raises (e.g. UpstreamError).
        """
        definition = self.get(name)
        arguments = validate_arguments(name, definition.schema, raw_arguments)
        return definition.handler(**arguments)

    def dispatch(self, name: str, raw_arguments: Optional[Mapping[str, Any]] = None) -> ToolResult:
        """Like :meth:`invoke`, but errors come back as failure envelopes."""
        try:
            return self.invoke(name, raw_arguments)
        except TriageError as e:
            logger.warning("Tool %s failed: %s", name, e)
            return ToolResult.failure(str(e))
