"""Concurrency — bounded, time-limited diagram rendering."""

from remder.concurrency.gate import Completed, Failed, GateResult, RenderGate

__all__ = ["RenderGate", "Completed", "Failed", "GateResult"]
