# Round Robin Scheduling Engine
# rrsim/scheduler.py

import collections
import enum
from dataclasses import dataclass
from typing import Optional, Union

from rrsim.errors import InvalidQuantumError
from rrsim.process import ProcessRegistry

Pid = Union[str, int]


class EventKind(enum.Enum):
    ARRIVED = "arrived"
    STARTED = "started"
    PREEMPTED = "preempted"
    FINISHED = "finished"
    IDLE = "idle"


class EngineState(enum.Enum):
    """State of the machine as seen after a tick"""

    IDLE = "idle"
    DISPATCHING = "dispatching"
    RUNNING = "running"
    PREEMPTING = "preempting"
    COMPLETED = "completed"


@dataclass
class ExecutionBlock:
    """[start, end) of simulated time owned by one process, or idle when pid is None"""

    pid: Optional[Pid]
    start: int
    end: int

    @property
    def is_idle(self) -> bool:
        return self.pid is None

    @property
    def duration(self) -> int:
        return self.end - self.start

    def as_dict(self):
        return {"pid": "idle" if self.is_idle else self.pid, "start": self.start, "end": self.end}


@dataclass(frozen=True)
class TraceEvent:
    tick: int
    kind: EventKind
    pid: Optional[Pid] = None

    def as_dict(self):
        return {"time": self.tick, "event": self.kind.value, "pid": "" if self.pid is None else self.pid}


class RRScheduler:
    """
    Preemptive Round Robin scheduling on a single CPU.
    - Arrivals join the tail of the ready queue in input order
    - The head of the queue runs for at most `quantum` ticks
    - A process that finishes on the same tick its slice expires is finished, not preempted

    Attributes:
        registry: ProcessRegistry with every process of the run
        quantum: fixed time slice
        clock: current simulated tick
        ready_queue: deque of processes waiting for the CPU
        running: process holding the CPU, or None
        slices_used: ticks the running process has held the CPU since dispatch
        blocks: ExecutionBlocks covering [0, clock) without gaps
        trace: TraceEvents in emission order
        finished: processes in completion order
        log: human-readable log of events
        verbose: if True, print log entries to console
    Methods:
        tick(): advance the simulation by one tick
        run(): tick until every process has finished
        snapshot(): current state for the visualizer
    """

    def __init__(self, processes, quantum=3, verbose=False):
        if not isinstance(quantum, int) or isinstance(quantum, bool) or quantum <= 0:
            raise InvalidQuantumError(f"quantum must be a positive integer, got {quantum!r}")

        if isinstance(processes, ProcessRegistry):
            self.registry = processes
        else:
            self.registry = ProcessRegistry(processes)

        self.quantum = quantum
        self.clock = 0

        # deque (double ended queue) for efficient pops from left
        self.ready_queue = collections.deque()
        self.running = None
        self.slices_used = 0
        self.run_start = None  # tick the current slice began

        self.blocks = []
        self.trace = []
        self.finished = []
        self.log = []
        self.verbose = verbose

        self.state = EngineState.COMPLETED if self.registry.all_completed() else EngineState.IDLE

    def _record(self, tick, kind, pid=None, message=None):
        """Append a TraceEvent and its human-readable line"""
        self.trace.append(TraceEvent(tick, kind, pid))
        entry = f"time={tick:<3} | {message or kind.value}"
        self.log.append(entry)
        if self.verbose:
            print(entry)

    def _close_block(self, end):
        self.blocks.append(ExecutionBlock(self.running.pid, self.run_start, end))

    def tick(self):
        """
        Advance the scheduler by one tick
        Returns: EngineState after the tick (COMPLETED is returned unchanged
        and without side effects once every process has finished)
        """
        if self.state is EngineState.COMPLETED:
            return self.state

        t = self.clock
        dispatched = False
        preempted = False

        # Arrivals first, so a process arriving at t can run at t
        for proc in self.registry.all_arrived_at(t):
            if proc is self.running or proc.is_finished():
                continue
            self.ready_queue.append(proc)
            self._record(t, EventKind.ARRIVED, proc.pid, f"{proc.pid} arrived")

        # Dispatch from the head of the ready queue
        if self.running is None and self.ready_queue:
            self.running = self.ready_queue.popleft()
            self.slices_used = 0
            self.run_start = t
            if self.running.first_start is None:
                self.running.first_start = t
            dispatched = True
            self._record(t, EventKind.STARTED, self.running.pid, f"{self.running.pid} dispatched to CPU")

        if self.running is not None:
            proc = self.running
            done = proc.run_one_tick()
            self.slices_used += 1

            # completion wins over quantum expiry
            if done:
                proc.finish = t + 1
                self._close_block(t + 1)
                self.finished.append(proc)
                self.running = None
                self._record(t + 1, EventKind.FINISHED, proc.pid, f"{proc.pid} finished")
            elif self.slices_used == self.quantum:
                self._close_block(t + 1)
                self.ready_queue.append(proc)
                self.running = None
                preempted = True
                self._record(t + 1, EventKind.PREEMPTED, proc.pid,
                             f"{proc.pid} preempted (quantum expired)")
        else:
            last = self.blocks[-1] if self.blocks else None
            if last is not None and last.is_idle and last.end == t:
                last.end = t + 1
            else:
                self.blocks.append(ExecutionBlock(None, t, t + 1))
            self._record(t, EventKind.IDLE, message="CPU idle")

        self.clock = t + 1

        if self.registry.all_completed():
            self.state = EngineState.COMPLETED
        elif preempted:
            self.state = EngineState.PREEMPTING
        elif self.running is not None:
            self.state = EngineState.DISPATCHING if dispatched else EngineState.RUNNING
        else:
            self.state = EngineState.IDLE
        return self.state

    def is_completed(self):
        return self.state is EngineState.COMPLETED

    def has_jobs(self):
        """Check if there is anything left to simulate (for visualizer compatibility)"""
        return not self.is_completed()

    def run(self, max_ticks=None):
        """
        Tick until every process has finished
        Args:
            max_ticks: optional upper bound on the number of ticks taken by this call
        Returns: EngineState after the last tick
        """
        taken = 0
        while self.has_jobs():
            if max_ticks is not None and taken >= max_ticks:
                break
            self.tick()
            taken += 1
        return self.state

    @property
    def running_pid(self):
        return self.running.pid if self.running is not None else None

    def ready_pids(self):
        return [p.pid for p in self.ready_queue]

    def processes(self):
        """Return all processes known to the scheduler, in input order"""
        return list(self.registry)

    def snapshot(self):
        """Return current state for the visualizer"""
        return {
            "clock": self.clock,
            "quantum": self.quantum,
            "state": self.state.value,
            "not_arrived": [p.pid for p in self.registry.pending()],
            "ready": self.ready_pids(),
            "running": self.running_pid,
            "slices_used": self.slices_used,
            "finished": [p.pid for p in self.finished],
        }

    def timeline(self):
        """Return the human-readable log as a single string"""
        return "\n".join(self.log)
