"""Command-line front end.

    csim [-hv] -S <num> -K <num> -B <num> -p <policy> -t <file>

Prints `hits:<H> misses:<M> evictions:<E>` when the trace has been
replayed. Configuration and trace errors are reported on stderr as
`ERROR: ...` with exit status 1; missing arguments go to stdout followed
by the usage text.
"""
import argparse
import logging
import sys

from csim.core.trace import TraceFormatError
from csim.data.stats_export import Exporter
from csim.simulation.config import ConfigError, MissingArgumentsError, SimulationConfig, load_config
from csim.simulation.simulation import Simulation

logger = logging.getLogger(__name__)

USAGE = """\
Usage: csim [-hv] -S <num> -K <num> -B <num> -p <policy> -t <file>
Options:
  -h           Print this help message.
  -v           Optional verbose flag.
  -S <num>     Number of sets.           (must be > 0)
  -K <num>     Number of lines per set.  (must be > 0)
  -B <num>     Number of bytes per line. (must be > 0)
  -p <policy>  Eviction policy. (one of 'FIFO', 'LRU')
  -t <file>    Trace file.

Extra options:
  --config <file>       JSON file with S, K, B, policy, trace (flags override it)
  --export-csv <file>   Write final statistics as CSV.
  --export-json <file>  Write statistics and hit-rate history as JSON.
  --chart <file>        Plot the hit-rate history to a PDF.
  --log-level <level>   Logging level (default WARNING).

Examples:
$ csim    -S 16  -K 1 -B 16 -p LRU -t traces/yi2.trace
$ csim -v -S 256 -K 2 -B 16 -p LRU -t traces/yi2.trace
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='csim', add_help=False, usage=argparse.SUPPRESS)
    parser.add_argument('-h', action='store_true', dest='help')
    parser.add_argument('-v', action='store_true', dest='verbose')
    parser.add_argument('-S', type=int, dest='set_count')
    parser.add_argument('-K', type=int, dest='lines_per_set')
    parser.add_argument('-B', type=int, dest='line_bytes')
    parser.add_argument('-p', dest='policy')
    parser.add_argument('-t', dest='trace_path')
    parser.add_argument('--config')
    parser.add_argument('--export-csv')
    parser.add_argument('--export-json')
    parser.add_argument('--chart')
    parser.add_argument('--log-level', default='WARNING', type=str.upper,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'])
    return parser


def format_record(info: dict) -> str:
    """One verbose line: the record followed by the outcome of each access."""
    outcomes = []
    for res in info['results']:
        if res.hit:
            outcomes.append('hit')
        elif res.evicted is not None:
            outcomes.append('miss eviction')
        else:
            outcomes.append('miss')
    return ' '.join([str(info['record'])] + outcomes)


def config_from_args(args) -> SimulationConfig:
    base = load_config(args.config) if args.config else SimulationConfig()
    return base.merged(
        set_count=args.set_count,
        lines_per_set=args.lines_per_set,
        line_bytes=args.line_bytes,
        policy=args.policy,
        trace_path=args.trace_path,
        verbose=True if args.verbose else None,
    ).validate()


def export_results(args, sim: Simulation):
    if args.export_csv:
        Exporter.export_stats_csv(args.export_csv, sim.stats)
        logger.info("statistics written to %s", args.export_csv)
    if args.export_json:
        Exporter.export_stats_json(args.export_json, sim.stats, sim.hit_rate_history)
        logger.info("statistics written to %s", args.export_json)
    if args.chart:
        Exporter.export_chart_pdf(args.chart, sim.hit_rate_history)
        logger.info("chart written to %s", args.chart)


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    if args.help:
        print(USAGE, end='')
        return 0

    logging.basicConfig(level=args.log_level, format='%(levelname)s: %(message)s')

    try:
        config = config_from_args(args)
    except MissingArgumentsError as exc:
        # reported on stdout together with the usage text
        print(f"ERROR: {exc}")
        print(USAGE, end='')
        return 1
    except ConfigError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1
    except OSError as exc:
        print(f"ERROR: {args.config}: {exc.strerror}", file=sys.stderr)
        return 1

    sim = Simulation(config)
    callback = (lambda info: print(format_record(info))) if config.verbose else None
    try:
        stats = sim.run(callback=callback)
    except OSError as exc:
        print(f"ERROR: {config.trace_path}: {exc.strerror}", file=sys.stderr)
        return 1
    except TraceFormatError as exc:
        print(f"ERROR: {config.trace_path}: {exc}", file=sys.stderr)
        return 1

    try:
        export_results(args, sim)
    except OSError as exc:
        print(f"ERROR: {exc.filename}: {exc.strerror}", file=sys.stderr)
        return 1

    print(stats.summary())
    return 0


if __name__ == '__main__':
    sys.exit(main())
