"""Reactive layer — debounced rebuilds in watch mode."""

from folio.reactive.scheduler import RebuildScheduler, RebuildState

__all__ = ["RebuildScheduler", "RebuildState"]
