# workload.py
#
# Reads process definitions from JSON/CSV files or table cells and turns
# them into clean {pid, arrival, burst, priority} dicts. Anything malformed
# is rejected here with WorkloadError, before the scheduler is built.

import csv
import json
import random
from pathlib import Path

from rrsim.errors import WorkloadError

ARRIVAL_STRATEGIES = ["original", "staggered", "random", "burst"]


def parse_int(value, field, pid="?"):
    """Parse a table cell (int or string) as a base-10 integer"""
    if isinstance(value, bool):
        raise WorkloadError(f"{pid}: {field} must be an integer, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            return int(text, 10)
        except ValueError:
            pass
    raise WorkloadError(f"{pid}: {field} must be an integer, got {value!r}")


def normalize_row(row):
    """
    Normalize one process definition
    Args:
        row: mapping with pid, arrival (or arrival_time), burst and optional priority
    Returns: dict ready to hand to the scheduler
    """
    pid = row.get("pid")
    if isinstance(pid, str):
        pid = pid.strip()
    if pid is None or pid == "":
        raise WorkloadError(f"process definition without a pid: {row!r}")
    if not isinstance(pid, (str, int)) or isinstance(pid, bool):
        raise WorkloadError(f"pid must be a string or integer, got {pid!r}")

    arrival = row.get("arrival", row.get("arrival_time"))
    if arrival is None:
        raise WorkloadError(f"{pid}: missing arrival")
    if "burst" not in row:
        raise WorkloadError(f"{pid}: missing burst")

    arrival = parse_int(arrival, "arrival", pid)
    burst = parse_int(row["burst"], "burst", pid)
    priority = row.get("priority")
    priority = 0 if priority in (None, "") else parse_int(priority, "priority", pid)

    if arrival < 0:
        raise WorkloadError(f"{pid}: arrival must not be negative (got {arrival})")
    if burst <= 0:
        raise WorkloadError(f"{pid}: burst must be positive (got {burst})")

    return {"pid": pid, "arrival": arrival, "burst": burst, "priority": priority}


def normalize_rows(rows):
    processes = [normalize_row(row) for row in rows]
    seen = set()
    for p in processes:
        if p["pid"] in seen:
            raise WorkloadError(f"duplicate process id {p['pid']!r}")
        seen.add(p["pid"])
    return processes


def apply_arrival_strategy(processes, strategy="original", rng=None):
    """
    Reassign arrival times
    - original: keep the arrival from the input
    - staggered: processes arrive at regular intervals (every 2-5 ticks)
    - random: anywhere in 0..50
    - burst: groups of five arrive together, then a gap (the first group starts at 0)
    """
    if strategy not in ARRIVAL_STRATEGIES:
        raise WorkloadError(
            f"Invalid arrival strategy '{strategy}'. Must be one of: {', '.join(ARRIVAL_STRATEGIES)}")
    if strategy == "original":
        return processes

    rng = rng or random.Random()
    current_time = 0
    for idx, p in enumerate(processes):
        if strategy == "staggered":
            p["arrival"] = current_time
            current_time += rng.randint(2, 5)
        elif strategy == "random":
            p["arrival"] = rng.randint(0, 50)
        elif strategy == "burst":
            if idx % 5 == 0 and idx > 0:
                current_time += rng.randint(10, 20)
            p["arrival"] = current_time + rng.randint(0, 2)
    return processes


def _read_rows(path):
    # utf-8-sig drops the BOM spreadsheet exports put in front of the header
    try:
        if path.suffix.lower() == ".csv":
            with open(path, newline="", encoding="utf-8-sig") as f:
                return list(csv.DictReader(f))

        with open(path, encoding="utf-8-sig") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise WorkloadError(f"{path}: not valid JSON ({e})") from e
    except (OSError, UnicodeDecodeError) as e:
        raise WorkloadError(f"{path}: cannot be read ({e})") from e
    if isinstance(data, dict):
        data = data.get("processes", [])
    if not isinstance(data, list) or not all(isinstance(row, dict) for row in data):
        raise WorkloadError(f"{path}: expected a list of process objects")
    return data


def load_processes(filename, limit=None, arrival_strategy="original", seed=None):
    """
    Load process definitions from a .json or .csv file
    Args:
        filename: path to the workload file
        limit: keep only the first `limit` processes
        arrival_strategy: one of ARRIVAL_STRATEGIES
        seed: random seed so generated arrivals are reproducible
    Returns: list of normalized process dicts
    """
    path = Path(filename)
    if not path.exists():
        raise WorkloadError(f"workload file not found: {path}")
    if limit is not None and limit < 0:
        raise WorkloadError(f"limit must not be negative (got {limit})")

    rows = _read_rows(path)[:limit]
    processes = normalize_rows(rows)
    rng = random.Random(seed) if seed is not None else None
    return apply_arrival_strategy(processes, arrival_strategy, rng)


def demo_processes():
    """Default demo workload shown when no file is given"""
    return [
        {"pid": "P1", "arrival": 0, "burst": 3, "priority": 1},
        {"pid": "P2", "arrival": 5, "burst": 2, "priority": 1},
        {"pid": "P3", "arrival": 8, "burst": 4, "priority": 1},
    ]
