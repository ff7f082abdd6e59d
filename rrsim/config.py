# config.py

from dataclasses import dataclass
from typing import Optional

from rrsim.workload import ARRIVAL_STRATEGIES


class ConfigError(ValueError):
    pass


@dataclass
class RunConfig:
    file: Optional[str] = None
    quantum: int = 3
    limit: Optional[int] = None
    arrival: str = "original"
    seed: Optional[int] = None
    fps: int = 2
    csv: Optional[str] = None
    json: Optional[str] = None
    png: str = "rr_screenshot.png"
    headless: bool = False
    verbose: bool = False


def _to_int(args, key):
    try:
        return int(args[key])
    except ValueError:
        raise ConfigError(f"'{key}' must be an integer, got '{args[key]}'") from None


def _to_bool(value):
    return value.strip().lower() in ("1", "true", "yes", "on")


def parse_args(argv):
    """
    Parse key=value command line pairs, e.g. `file=jobs.json quantum=4 fps=5`
    Arguments without '=' are ignored.
    """
    args = {}
    for arg in argv:
        if "=" in arg:
            k, v = arg.split("=", 1)
            args[k] = v

    config = RunConfig()
    config.file = args.get("file")
    for key in ("quantum", "limit", "seed", "fps"):
        if key in args:
            setattr(config, key, _to_int(args, key))
    config.arrival = args.get("arrival", config.arrival)
    config.csv = args.get("csv")
    config.json = args.get("json")
    config.png = args.get("png", config.png)
    config.headless = _to_bool(args.get("headless", "false"))
    config.verbose = _to_bool(args.get("verbose", "false"))

    if config.arrival not in ARRIVAL_STRATEGIES:
        raise ConfigError(
            f"Invalid arrival strategy '{config.arrival}'. "
            f"Must be one of: {', '.join(ARRIVAL_STRATEGIES)}")
    if config.fps < 1:
        raise ConfigError("'fps' must be at least 1")
    if config.limit is not None and config.limit < 0:
        raise ConfigError("'limit' must not be negative")
    return config
