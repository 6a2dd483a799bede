#!/usr/bin/env python3
# run_causeway.py
# This file is part of Causeway - Vector-Clock Log Causality Analysis
#
# Command-line interface for causal graph construction with configurable logging levels

import sys
import json
import argparse
from pathlib import Path
from typing import List, Optional, Tuple

from core.causal_graph import CausalGraphBuilder
from core.exceptions import GraphError
from parser import LogParseError, parse_log
from utils.catalog import CatalogFormatError, find_entry, load_catalog
from utils.log_reader import LogFileError, read_log_text
from utils.logger import configure_logging, get_logger


def resolve_inputs(args: argparse.Namespace) -> Tuple[Path, str, Optional[str]]:
    """Determine the log file, event pattern and delimiter to use.

    A catalog example supplies all three; explicit --pattern and
    --delimiter flags override the example's.

    Returns:
        (log path, event pattern, delimiter or None)

    Raises:
        CatalogFormatError: If the catalog or the example cannot be found
        ValueError: If no log file or no pattern was given
    """
    log_path = args.log
    pattern = args.pattern
    delimiter = args.delimiter

    if args.example:
        if not args.catalog:
            raise ValueError("--example requires --catalog")
        entry = find_entry(load_catalog(args.catalog), args.example)
        log_path = log_path or entry.path
        pattern = pattern or entry.parser
        delimiter = delimiter if delimiter is not None else entry.delimiter

    if log_path is None:
        raise ValueError("No log file given (use --log or --catalog/--example)")
    if not pattern:
        raise ValueError("No event pattern given (use --pattern or --catalog/--example)")

    return Path(log_path), pattern, delimiter or None


def graph_to_dict(label: str, graph: CausalGraphBuilder) -> dict:
    """Render one execution's causal graph as JSON-ready data."""
    nodes = []
    for node in graph.nodes:
        hb = node.happened_before
        nodes.append(
            {
                "id": node.event.event_id,
                "host": node.host,
                "line": node.event.line_number,
                "text": node.event.text,
                "clock": node.timestamp.clock,
                "fields": dict(node.event.fields),
                "pos": node.pos,
                "happened_before": None
                if hb is None
                else {
                    "kind": str(hb.kind),
                    "ref": None if hb.target.genesis else hb.target.event.event_id,
                },
            }
        )

    return {
        "label": label,
        "hosts": graph.hosts,
        "nodes": nodes,
        "edges": [
            {"source": node.happened_before.target.event.event_id, "target": node.event.event_id}
            for node in graph.edges
        ],
    }


def print_summary(label: str, graph: CausalGraphBuilder) -> None:
    """Log a human-readable summary of one execution."""
    logger = get_logger()
    shown = label if label else "<unlabelled>"

    logger.info(f"\n📋 Execution {shown}")
    logger.info(f"   Hosts: {', '.join(graph.hosts)}")
    for host, count in graph.host_event_counts().items():
        logger.info(f"     {host}: {count} events")
    logger.info(f"   External edges: {len(graph.edges)}")
    logger.info(f"   Max rank: {graph.max_rank}")

    for node in graph.edges:
        source = node.happened_before.target
        logger.info(
            f"     {source.host}:{source.event.line_number} → {node.host}:{node.event.line_number}"
        )


def create_argument_parser() -> argparse.ArgumentParser:
    """Create and configure argument parser for command line interface.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        description="Causeway vector-clock log causality analysis",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python run_causeway.py -l run.log -p '(?<host>\\S+) (?<clock>{.*})\\n(?<event>.*)'
  python run_causeway.py -l run.log -p PATTERN -d '=== (?<trace>\\w+) ===' --json
  python run_causeway.py --catalog data/examples_config.json --example log/three_hosts.log -v

Pattern format:
  The event pattern must define the named groups clock (JSON object of
  host -> integer), host and event. Other named groups become event fields.
  The optional delimiter separates executions; its trace group labels them.
        """,
    )

    parser.add_argument("-l", "--log", type=Path, help="Path to the raw log file")
    parser.add_argument("-p", "--pattern", help="Event pattern with clock, host and event groups")
    parser.add_argument("-d", "--delimiter", help="Execution delimiter pattern")

    parser.add_argument("--catalog", type=Path, help="Path to the example catalog (JSON)")
    parser.add_argument("--example", help="Catalog entry (filename or title) to load")

    parser.add_argument("--label", help="Only analyse the execution with this label")

    parser.add_argument(
        "--json", action="store_true", help="Print the causal graphs as JSON on stdout"
    )
    parser.add_argument(
        "--validate-only", action="store_true", help="Only validate that the log parses"
    )

    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable verbose output"
    )
    parser.add_argument(
        "--debug", action="store_true", help="Enable debug output (overrides --verbose)"
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for causal graph analysis.

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=args.verbose, debug=args.debug)
    logger = get_logger()

    # stdout carries the JSON document, progress goes to stderr
    previous_stream = logger.set_stream(sys.stderr) if args.json else None

    try:
        log_path, pattern, delimiter = resolve_inputs(args)

        logger.info(f"🔍 Parsing log file: {log_path}")
        parsed = parse_log(read_log_text(log_path), pattern, delimiter)
        logger.info(f"✅ Parsed {len(parsed.labels)} execution(s)")

        if args.validate_only:
            logger.info("✅ Log validation successful. Exiting.")
            return 0

        labels = parsed.labels
        if args.label is not None:
            if args.label not in labels:
                logger.error(f"No execution labelled {args.label!r}")
                return 1
            labels = [args.label]

        results = []
        for label in labels:
            graph = CausalGraphBuilder(parsed.get_log_events(label))
            print_summary(label, graph)
            results.append(graph_to_dict(label, graph))

        if args.json:
            print(json.dumps(results, indent=2))

        return 0

    except (LogFileError, CatalogFormatError) as e:
        logger.error(f"Input file error: {e}")
        return 1

    except LogParseError as e:
        logger.error(f"Log parsing error ({type(e).__name__}): {e}")
        return 2

    except GraphError as e:
        logger.error(f"Causal graph error ({type(e).__name__}): {e}")
        return 3

    except ValueError as e:
        logger.error(f"Usage error: {e}")
        return 4

    except KeyboardInterrupt:
        logger.error("Analysis interrupted by user")
        return 5

    finally:
        if previous_stream is not None:
            logger.set_stream(previous_stream)


if __name__ == "__main__":
    sys.exit(main())
