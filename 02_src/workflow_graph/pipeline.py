"""Pipeline abstractions and sequential async runner."""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List

logger = logging.getLogger(__name__)


class PipelinePhase(ABC):
    phase_name: str

    @abstractmethod
    async def run(self, context: Dict[str, Any]) -> Dict[str, Any]:
        raise NotImplementedError


class PipelineRunner:
    def __init__(self, phases: Iterable[PipelinePhase]) -> None:
        self.phases: List[PipelinePhase] = list(phases)

    async def run(self, context: Dict[str, Any]) -> Dict[str, Any]:
        current = dict(context)
        for phase in self.phases:
            try:
                phase_result = await phase.run(current)
            except Exception:
                logger.error("Phase '%s' failed; aborting pipeline", phase.phase_name)
                raise
            if not isinstance(phase_result, dict):
                raise TypeError(f"Phase '{phase.phase_name}' must return dict context.")
            current.update(phase_result)
            logger.debug("Phase '%s' done", phase.phase_name)
        return current
