from .errors import InvalidProcessError, InvalidQuantumError, SchedulerError, WorkloadError
from .process import Process, ProcessRegistry
from .scheduler import EngineState, EventKind, ExecutionBlock, RRScheduler, TraceEvent
from .stats import SchedulerStats, compute_stats
from .driver import SimulationDriver

__all__ = [
    "InvalidProcessError",
    "InvalidQuantumError",
    "SchedulerError",
    "WorkloadError",
    "Process",
    "ProcessRegistry",
    "EngineState",
    "EventKind",
    "ExecutionBlock",
    "RRScheduler",
    "TraceEvent",
    "SchedulerStats",
    "compute_stats",
    "SimulationDriver",
]
