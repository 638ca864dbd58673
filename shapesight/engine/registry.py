"""Transform registry — every detection step is a standalone function registered via decorator.

Usage:
    @transform(id="T2.01", layer=Layer.GEOMETRY, dependencies=["T1.02"])
    def convex_hull(ctx: PipelineContext) -> None:
        for comp in ctx.components:
            comp.hull = monotone_chain_hull(comp.boundary or comp.pixels)

Adding a new step = creating one file under a layer package with the decorator.
"""

from __future__ import annotations

import enum
import heapq
import importlib
import logging
import pkgutil
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from shapesight.engine.context import PipelineContext

logger = logging.getLogger(__name__)

_LAYER_PACKAGES = ("layer0", "layer1", "layer2", "layer3")


class Layer(enum.IntEnum):
    BINARIZATION = 0
    SEGMENTATION = 1
    GEOMETRY = 2
    CLASSIFICATION = 3


@dataclass
class TransformSpec:
    id: str
    layer: Layer
    fn: Callable[["PipelineContext"], None]
    dependencies: list[str] = field(default_factory=list)
    description: str = ""


class TransformRegistry:
    """Registry of detection transforms, keyed by transform ID."""

    def __init__(self) -> None:
        self._transforms: dict[str, TransformSpec] = {}

    def register(self, spec: TransformSpec) -> None:
        if spec.id in self._transforms:
            raise ValueError(f"Duplicate transform ID: {spec.id}")
        self._transforms[spec.id] = spec
        logger.debug("Registered transform %s (%s)", spec.id, spec.layer.name)

    def get_layer(self, layer: Layer) -> list[TransformSpec]:
        specs = [s for s in self._transforms.values() if s.layer == layer]
        return sorted(specs, key=lambda s: s.id)

    def all(self) -> list[TransformSpec]:
        return sorted(self._transforms.values(), key=lambda s: (s.layer, s.id))

    def resolve_order(self, requested_ids: set[str] | None = None) -> list[TransformSpec]:
        """Order transforms so each runs after its dependencies.

        ``requested_ids`` pulls in its transitive dependencies; None means all.
        Ties break by (layer, id). An unknown dependency, a dependency on a
        later layer, or a cycle raises ValueError.
        """
        if requested_ids is None:
            wanted = set(self._transforms)
        else:
            wanted = set()
            stack = list(requested_ids)
            while stack:
                tid = stack.pop()
                if tid in wanted or tid not in self._transforms:
                    continue
                wanted.add(tid)
                stack.extend(self._transforms[tid].dependencies)

        pending: dict[str, int] = {}
        dependents: dict[str, list[str]] = {tid: [] for tid in wanted}
        for tid in wanted:
            spec = self._transforms[tid]
            for dep in spec.dependencies:
                if dep not in self._transforms:
                    raise ValueError(f"{tid} depends on unknown transform {dep}")
                if self._transforms[dep].layer > spec.layer:
                    raise ValueError(f"{tid} ({spec.layer.name}) depends on later-layer {dep}")
                dependents[dep].append(tid)
            pending[tid] = len(spec.dependencies)

        # Kahn's algorithm over a (layer, id) heap
        ready = [(self._transforms[t].layer, t) for t, n in pending.items() if n == 0]
        heapq.heapify(ready)
        ordered: list[TransformSpec] = []
        while ready:
            _, tid = heapq.heappop(ready)
            ordered.append(self._transforms[tid])
            for nxt in dependents[tid]:
                pending[nxt] -= 1
                if pending[nxt] == 0:
                    heapq.heappush(ready, (self._transforms[nxt].layer, nxt))

        if len(ordered) != len(wanted):
            stuck = sorted(wanted - {s.id for s in ordered})
            raise ValueError(f"Circular dependency detected among: {stuck}")
        return ordered

    @property
    def count(self) -> int:
        return len(self._transforms)


# Module-level singleton
_registry = TransformRegistry()


def get_registry() -> TransformRegistry:
    return _registry


def register_transforms() -> TransformRegistry:
    """Import every layer module so its @transform decorators fire.

    Safe to call repeatedly: modules are only executed on first import.
    """
    for layer_name in _LAYER_PACKAGES:
        package_name = f"shapesight.engine.{layer_name}"
        package = importlib.import_module(package_name)
        for _, module_name, _ in pkgutil.iter_modules(package.__path__):
            importlib.import_module(f"{package_name}.{module_name}")
    return _registry


def transform(
    *,
    id: str,
    layer: Layer,
    dependencies: list[str] | None = None,
    description: str = "",
):
    """Decorator to register a transform function."""

    def decorator(fn: Callable[["PipelineContext"], None]):
        spec = TransformSpec(
            id=id,
            layer=layer,
            fn=fn,
            dependencies=dependencies or [],
            description=description,
        )
        _registry.register(spec)
        return fn

    return decorator
