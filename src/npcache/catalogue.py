"""
Catalogue of the cache engine operations npcache forwards.

Each entry names an engine operation by its dotted attribute path. The
catalogue is fixed: the facade exposes exactly these operations, and the
engine is expected to provide all of them.
"""
from __future__ import annotations

from functools import reduce
from typing import Any, Callable, Dict, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator

__all__ = ["MethodSpec", "CATALOGUE", "METHODS", "lookup"]


class MethodSpec(BaseModel):
    """A single forwarded engine operation."""
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., pattern=r"^[a-z_]+(\.[a-z_]+)*$", description="Dotted engine attribute path")
    stream: bool = Field(default=False, description="Operation returns a readable stream")
    write_stream: bool = Field(default=False, description="Operation returns a writable sink")

    @model_validator(mode="after")
    def _single_shape(self) -> "MethodSpec":
        if self.stream and self.write_stream:
            raise ValueError(f"{self.name}: an operation cannot be both readable and writable")
        return self

    @property
    def path(self) -> Tuple[str, ...]:
        return tuple(self.name.split("."))


CATALOGUE: Tuple[MethodSpec, ...] = (
    MethodSpec(name="ls"),
    MethodSpec(name="ls.stream", stream=True),
    MethodSpec(name="get"),
    MethodSpec(name="get.by_digest"),
    MethodSpec(name="get.stream", stream=True),
    MethodSpec(name="get.stream.by_digest", stream=True),
    MethodSpec(name="get.info"),
    MethodSpec(name="get.has_content"),
    MethodSpec(name="put"),
    MethodSpec(name="put.stream", write_stream=True),
    MethodSpec(name="rm.all"),
    MethodSpec(name="rm.entry"),
    MethodSpec(name="rm.content"),
    MethodSpec(name="clear_memoized"),
    MethodSpec(name="tmp.mkdir"),
    MethodSpec(name="tmp.fix"),
    MethodSpec(name="tmp.with_tmp"),
    MethodSpec(name="verify"),
    MethodSpec(name="verify.last_run"),
)

METHODS: Dict[str, MethodSpec] = {spec.name: spec for spec in CATALOGUE}


def lookup(engine: Any, spec: MethodSpec) -> Callable[..., Any]:
    """
    Resolve `spec` to the engine's callable.

    Raises:
        AttributeError: If the engine lacks the operation
    """
    return reduce(getattr, spec.path, engine)
