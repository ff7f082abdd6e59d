# driver.py

import copy

from rrsim.scheduler import RRScheduler


class SimulationDriver:
    """
    Owns the only reference to a scheduler and paces it.

    Stepping back replays nothing: before every tick a deep copy of the
    scheduler is pushed onto `history`, and step_back() pops the latest copy
    and puts it in place of the live scheduler. Copies are never ticked while
    they sit in the history.

    Attributes:
        processes: the process definitions the run was built from
        quantum: time slice handed to every rebuilt scheduler
        scheduler: the live RRScheduler
        history: snapshots taken before each tick, oldest first
    """

    def __init__(self, processes, quantum=3, verbose=False):
        self.processes = list(processes)
        self.quantum = quantum
        self.verbose = verbose
        self.history = []
        self.scheduler = self._build()

    def _build(self):
        return RRScheduler(self.processes, quantum=self.quantum, verbose=self.verbose)

    def step(self):
        """Tick once; returns the EngineState after the tick"""
        if self.scheduler.is_completed():
            return self.scheduler.state
        self.history.append(copy.deepcopy(self.scheduler))
        return self.scheduler.tick()

    def step_back(self):
        """Restore the snapshot taken before the last tick; False when there is none"""
        if not self.history:
            return False
        self.scheduler = self.history.pop()
        return True

    def can_step_back(self):
        return bool(self.history)

    def run(self):
        while not self.scheduler.is_completed():
            self.step()
        return self.scheduler.state

    def reset(self):
        """Rebuild the scheduler from the original definitions and drop history"""
        self.history = []
        self.scheduler = self._build()
        return self.scheduler
