"""Front-end agnostic entry point used by both the CLI and the AI assistant."""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional

from ..errors import ComposerError
from ..registry import ChainDeployment
from ..validation import validate_params
from .base import ToolOutcome, ToolRegistry, ToolSpec

logger = logging.getLogger(__name__)


class ToolDispatcher:
    """Validate fully, then execute exactly one handler.

    Taxonomy errors are returned as ``ToolOutcome.error`` and never escape.
    """

    def __init__(self, registry: ToolRegistry, deployment: ChainDeployment) -> None:
        self._registry = registry
        self._deployment = deployment

    @property
    def registry(self) -> ToolRegistry:
        return self._registry

    def specs(self, *, include_writes: bool = True) -> List[ToolSpec]:
        return [spec for spec in self._registry.all().values() if include_writes or not spec.mutates]

    def definitions(self, *, include_writes: bool = True) -> List[Dict[str, Any]]:
        return [spec.definition() for spec in self.specs(include_writes=include_writes)]

    def invoke(self, name: str, raw_params: Optional[Mapping[str, Any]] = None) -> ToolOutcome:
        logger.info("Dispatching tool %s", name)
        try:
            spec = self._registry.get(name)
            params = validate_params(spec.input_model, raw_params, self._deployment)
            result = spec.handler(params)
        except ComposerError as exc:
            logger.warning("Tool %s failed with %s: %s", name, exc.code, exc.message)
            return ToolOutcome(tool=name, error=exc)
        return ToolOutcome(tool=name, result=result)
