# errors.py


class SchedulerError(Exception):
    """Base class for everything the simulator raises on purpose"""


class InvalidProcessError(SchedulerError):
    """Raised when a process definition cannot be simulated
    (non-positive burst, negative arrival, duplicate id)"""


class InvalidQuantumError(SchedulerError):
    """Raised when the time quantum is not a positive integer"""


class WorkloadError(ValueError):
    """
    Raised while reading user supplied process definitions
    (files or table cells), before anything reaches the engine
    """
