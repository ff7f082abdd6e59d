# main.py
import sys

from rrsim.config import ConfigError, parse_args
from rrsim.driver import SimulationDriver
from rrsim.errors import SchedulerError, WorkloadError
from rrsim.exporters import export_csv, export_json
from rrsim.stats import print_stats
from rrsim.workload import demo_processes, load_processes


def build_driver(config):
    if config.file:
        processes = load_processes(config.file, limit=config.limit,
                                   arrival_strategy=config.arrival, seed=config.seed)
    else:
        processes = demo_processes()[:config.limit]
    return SimulationDriver(processes, quantum=config.quantum, verbose=config.verbose)


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    try:
        config = parse_args(argv)
        driver = build_driver(config)
    except (ConfigError, WorkloadError, SchedulerError) as e:
        print(f"Error: {e}")
        return 1

    processes = driver.scheduler.processes()
    print("Running simulation with RRScheduler")
    print(f"Workload: {config.file or 'demo'}")
    print(f"Arrival strategy: {config.arrival}")
    print(f"Processes loaded: {len(processes)}")
    print(f"Time quantum: {config.quantum}")
    if processes:
        print(f"Arrival time range: {min(p.arrival for p in processes)} - "
              f"{max(p.arrival for p in processes)}")

    if config.headless:
        driver.run()
    else:
        # imported here so headless runs never initialise a display
        from rrsim.visualizer import run_pygame_visualization

        print(f"Running PYGAME visual simulation at {config.fps} FPS...")
        print("Controls: SPACE=Play/Pause, S=Step, B=Step back, R=Reset, Q=Quit")
        run_pygame_visualization(driver, fps=config.fps,
                                 csv_file=config.csv or "rr_trace.csv", png_file=config.png)

    print("\n" + "=" * 60)
    print("SIMULATION COMPLETE" if driver.scheduler.is_completed() else "SIMULATION STOPPED")
    print("=" * 60)
    print_stats(driver.scheduler)

    if config.csv:
        export_csv(driver.scheduler, config.csv)
        print(f"Trace exported to {config.csv}")
    if config.json:
        export_json(driver.scheduler, config.json)
        print(f"Timeline exported to {config.json}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
