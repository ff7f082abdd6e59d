# process.py

from rrsim.errors import InvalidProcessError


def _is_int(value):
    # bool is an int subclass, but True is not a tick count
    return isinstance(value, int) and not isinstance(value, bool)


class Process:
    """
    Represents a single CPU-bound process
    Attributes:
        pid: unique process ID (string or integer)
        arrival: tick at which the process enters the ready queue
        burst: total CPU ticks the process needs
        priority: informational only, round robin never looks at it
        remaining: CPU ticks still needed (starts at burst)
        first_start: tick of the first dispatch, None until dispatched
        finish: tick of completion, None until remaining reaches 0
    Methods:
        run_one_tick(): consume one tick of CPU, returns True when the burst is done
        is_finished(): True once remaining is 0
    """

    def __init__(self, pid, arrival, burst, priority=0):
        self.pid = pid
        self.arrival = arrival
        self.burst = burst
        self.priority = priority

        self.remaining = burst
        self.first_start = None
        self.finish = None

    def run_one_tick(self):
        """
        Consume one tick of CPU time
        Returns True if this tick finished the burst, False otherwise
        """
        if self.remaining == 0:
            return False
        self.remaining -= 1
        return self.remaining == 0

    def is_finished(self):
        return self.remaining == 0

    @property
    def response_time(self):
        if self.first_start is None:
            return None
        return self.first_start - self.arrival

    def __repr__(self):
        return f"{self.pid}"

    def __str__(self):
        return (f"Process[pid:{self.pid}, arrival:{self.arrival}, burst:{self.burst}, "
                f"remaining:{self.remaining}, first_start:{self.first_start}, finish:{self.finish}]")


class ProcessRegistry:
    """
    Authoritative list of processes for one simulation run.

    Input order is kept and doubles as the tie-break for processes that
    arrive on the same tick. Each process is handed out by all_arrived_at()
    at most once, so asking twice for the same tick never enqueues twice.
    """

    def __init__(self, processes):
        self._processes = []
        self._by_pid = {}
        self._arrived = set()

        for definition in processes:
            process = self._build(definition)
            if process.pid in self._by_pid:
                raise InvalidProcessError(f"duplicate process id {process.pid!r}")
            self._by_pid[process.pid] = process
            self._processes.append(process)

    @staticmethod
    def _build(definition):
        """Accept either a Process or a mapping with pid/arrival/burst[/priority]"""
        if isinstance(definition, Process):
            pid, arrival, burst, priority = definition.pid, definition.arrival, definition.burst, definition.priority
        else:
            try:
                pid, arrival, burst = definition["pid"], definition["arrival"], definition["burst"]
            except KeyError as e:
                raise InvalidProcessError(f"process definition is missing {e.args[0]!r}") from e
            priority = definition.get("priority", 0)

        if not isinstance(pid, (str, int)) or isinstance(pid, bool):
            raise InvalidProcessError(f"process id must be a string or integer, got {pid!r}")
        if not _is_int(arrival) or arrival < 0:
            raise InvalidProcessError(f"{pid}: arrival must be a non-negative integer, got {arrival!r}")
        if not _is_int(burst) or burst <= 0:
            raise InvalidProcessError(f"{pid}: burst must be a positive integer, got {burst!r}")

        return Process(pid, arrival, burst, priority)

    def all_arrived_at(self, tick):
        """
        Hand out, in input order, every process whose arrival is `tick`
        and that has not been handed out before
        """
        arrived = []
        for process in self._processes:
            if process.arrival == tick and process.pid not in self._arrived:
                self._arrived.add(process.pid)
                arrived.append(process)
        return arrived

    def all_completed(self):
        return all(p.is_finished() for p in self._processes)

    def pending(self):
        """Processes that have not arrived yet"""
        return [p for p in self._processes if p.pid not in self._arrived]

    def completed(self):
        return [p for p in self._processes if p.is_finished()]

    def get(self, pid):
        return self._by_pid[pid]

    def __iter__(self):
        return iter(self._processes)

    def __len__(self):
        return len(self._processes)
