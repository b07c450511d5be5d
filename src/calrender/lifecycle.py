"""
calrender.lifecycle
-------------------
Generation states and a result-style wrapper around the render pipeline.

    DRAFT -> GENERATING -> READY
                        -> FAILED

The engine keeps no job state; callers that persist jobs store the
GenerationOutcome themselves. ``JobFailure`` is for queue boundaries that
need to decide whether to retry: engine errors are deterministic, anything
else (I/O, missing fonts) may be transient.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any, FrozenSet, Mapping, Optional, Union

import structlog

from . import api
from .core.errors import CalrenderError
from .core.types import CalendarConfiguration, VectorDocument

logger = structlog.get_logger()


class GenerationState(str, Enum):
    DRAFT = "draft"
    GENERATING = "generating"
    READY = "ready"
    FAILED = "failed"


TRANSITIONS: Mapping[GenerationState, FrozenSet[GenerationState]] = {
    GenerationState.DRAFT: frozenset({GenerationState.GENERATING}),
    GenerationState.GENERATING: frozenset({GenerationState.READY, GenerationState.FAILED}),
    # a finished job can be regenerated after its configuration changes
    GenerationState.READY: frozenset({GenerationState.DRAFT}),
    GenerationState.FAILED: frozenset({GenerationState.DRAFT}),
}


def advance(state: GenerationState, target: GenerationState) -> GenerationState:
    if target not in TRANSITIONS[state]:
        raise ValueError(f"Illegal generation transition {state.value} -> {target.value}")
    return target


@dataclass(frozen=True)
class GenerationOutcome:
    state: GenerationState
    vector: Optional[VectorDocument] = None
    pdf: Optional[bytes] = None
    error: Optional[CalrenderError] = None

    @property
    def ok(self) -> bool:
        return self.state == GenerationState.READY


@dataclass(frozen=True)
class JobFailure:
    message: str
    error_type: str
    retryable: bool

    @classmethod
    def from_exception(cls, exc: BaseException) -> "JobFailure":
        return cls(
            message=str(exc),
            error_type=type(exc).__name__,
            retryable=not isinstance(exc, CalrenderError),
        )


def generate(
    config: Union[CalendarConfiguration, Mapping[str, Any]],
    holiday_map: Optional[Mapping[Union[date, str], str]] = None,
    *,
    print_document: bool = True,
) -> GenerationOutcome:
    """
    Run the pipeline once. CalrenderError becomes a FAILED outcome carrying
    the error; any other exception propagates.
    """
    state = advance(GenerationState.DRAFT, GenerationState.GENERATING)
    try:
        vector = api.render_vector(config, holiday_map)
        pdf = api.render_print_document(vector) if print_document else None
    except CalrenderError as exc:
        state = advance(state, GenerationState.FAILED)
        logger.warning("generation_failed", error=str(exc), error_type=type(exc).__name__)
        return GenerationOutcome(state=state, error=exc)

    state = advance(state, GenerationState.READY)
    logger.info("generation_ready", year=vector.year, pdf=pdf is not None)
    return GenerationOutcome(state=state, vector=vector, pdf=pdf)
