# stats.py
#
# Statistics are derived from the scheduler on demand and never written
# back, so they can be recomputed at any tick, including mid-run.

from dataclasses import dataclass, field
from typing import List

from rich.console import Console
from rich.table import Table


def waiting_time(process):
    return process.finish - process.arrival - process.burst


def turnaround_time(process):
    return process.finish - process.arrival


@dataclass(frozen=True)
class ProcessStats:
    pid: object
    arrival: int
    burst: int
    first_start: int
    finish: int
    turnaround: int
    waiting: int
    response: int


@dataclass(frozen=True)
class SchedulerStats:
    """Summary of a (possibly unfinished) run. Only completed processes count."""

    clock: int
    completed: int
    average_waiting_time: float
    average_turnaround_time: float
    average_response_time: float
    throughput: float
    cpu_utilization: float
    processes: List[ProcessStats] = field(default_factory=list)

    def as_dict(self):
        return {
            "clock": self.clock,
            "completed": self.completed,
            "average_waiting_time": self.average_waiting_time,
            "average_turnaround_time": self.average_turnaround_time,
            "average_response_time": self.average_response_time,
            "throughput": self.throughput,
            "cpu_utilization": self.cpu_utilization,
        }


def _mean(values):
    return sum(values) / len(values) if values else 0


def compute_stats(scheduler):
    """
    Derive statistics from the scheduler's current state
    Args:
        scheduler: RRScheduler instance (not modified)
    Returns: SchedulerStats

    CPU utilization counts the burst of completed processes only, so it
    undercounts while work is still in flight.
    """
    done = scheduler.registry.completed()
    clock = scheduler.clock

    rows = [
        ProcessStats(
            pid=p.pid,
            arrival=p.arrival,
            burst=p.burst,
            first_start=p.first_start,
            finish=p.finish,
            turnaround=turnaround_time(p),
            waiting=waiting_time(p),
            response=p.response_time,
        )
        for p in done
    ]

    return SchedulerStats(
        clock=clock,
        completed=len(done),
        average_waiting_time=_mean([r.waiting for r in rows]),
        average_turnaround_time=_mean([r.turnaround for r in rows]),
        average_response_time=_mean([r.response for r in rows]),
        throughput=len(done) / clock if clock else 0,
        cpu_utilization=sum(r.burst for r in rows) / clock if clock else 0,
        processes=rows,
    )


def stats_table(stats):
    """Build a rich Table with one row per completed process"""
    table = Table(title="Process Details")
    for col in ("ID", "Arrival", "Burst", "FirstCPU", "Finish", "Turnaround", "Wait", "Response"):
        table.add_column(col, justify="center")
    for row in stats.processes:
        table.add_row(*[str(v) for v in (row.pid, row.arrival, row.burst, row.first_start,
                                         row.finish, row.turnaround, row.waiting, row.response)])
    return table


def print_stats(scheduler, console=None):
    """Print statistics for all finished processes"""
    console = console or Console()
    stats = compute_stats(scheduler)

    if not stats.completed:
        console.print("\nNo processes have completed yet.")
        return stats

    console.print(stats_table(stats))

    console.print("\n" + "-" * 60)
    console.print("SUMMARY STATISTICS")
    console.print("-" * 60)
    console.print(f"Time Quantum:               {scheduler.quantum}")
    console.print(f"Total Processes Completed:  {stats.completed}")
    console.print(f"Total Simulation Time:      {stats.clock}")
    console.print(f"\nAverage Wait Time:          {stats.average_waiting_time:.2f}")
    console.print(f"Average Turnaround Time:    {stats.average_turnaround_time:.2f}")
    console.print(f"Average Response Time:      {stats.average_response_time:.2f}")
    console.print(f"Throughput:                 {stats.throughput:.2f}/t")
    console.print(f"CPU Utilization:            {stats.cpu_utilization * 100:.1f}%")
    console.print("=" * 60 + "\n")
    return stats
