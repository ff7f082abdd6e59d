# exporters.py

import csv
import json

from rrsim.stats import compute_stats

TRACE_FIELDS = ["time", "event", "pid"]


def export_csv(scheduler, filename="rr_trace.csv"):
    """Export the trace to a CSV file, one row per event in emission order"""
    # newline='' prevents extra blank lines on Windows
    with open(filename, "w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=TRACE_FIELDS)
        writer.writeheader()
        writer.writerows(event.as_dict() for event in scheduler.trace)
    return filename


def timeline_data(scheduler):
    stats = compute_stats(scheduler)
    return {
        "algorithm": "RoundRobin",
        "quantum": scheduler.quantum,
        "total_time": scheduler.clock,
        "blocks": [block.as_dict() for block in scheduler.blocks],
        "trace": [event.as_dict() for event in scheduler.trace],
        "processes": [
            {
                "pid": row.pid,
                "arrival_time": row.arrival,
                "burst": row.burst,
                "first_start": row.first_start,
                "completion_time": row.finish,
                "turnaround_time": row.turnaround,
                "waiting_time": row.waiting,
                "response_time": row.response,
            }
            for row in stats.processes
        ],
        "summary": stats.as_dict(),
    }


def export_json(scheduler, filename="rr_timeline.json"):
    """Export blocks, trace and statistics to a JSON file"""
    with open(filename, "w") as f:
        json.dump(timeline_data(scheduler), f, indent=2)
    return filename
