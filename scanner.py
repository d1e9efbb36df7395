#!/usr/bin/env python3
"""
Subdomain Takeover Scanner - Main Entry Point

Checks a list of subdomains for dangling DNS records that point to
unclaimed third-party services.
"""

import argparse
import logging
import sys
from typing import List, Optional, Sequence

from report.generator import ReportGenerator
from takeover import __version__
from takeover.config import DEFAULT_CONCURRENCY, DEFAULT_TIMEOUT, OUTPUT_FORMATS, ScanConfig
from takeover.console import Console
from takeover.dispatcher import Dispatcher
from takeover.exceptions import TakeoverError
from takeover.fingerprints import load_fingerprints
from takeover.models import ScanOutcome
from takeover.pipeline import MATCH_ON, DetectionPipeline
from takeover.prober import HTTPProber
from takeover.resolver import DNSResolver
from takeover.targets import load_targets

logger = logging.getLogger("takeover")


def run_scan(
    targets: Sequence[str],
    config: ScanConfig,
    console: Optional[Console] = None,
) -> List[ScanOutcome]:
    """
    Run the takeover scan over all targets.

    Args:
        targets: Subdomains to check
        config: Scan configuration
        console: Progress sink (None = silent)

    Returns:
        Scan outcomes in arrival order
    """
    catalog = load_fingerprints(config.fingerprints)

    if console:
        console.banner(config, len(targets), len(catalog))

    pipeline = DetectionPipeline(
        catalog,
        resolver=DNSResolver(timeout=config.timeout),
        prober=HTTPProber(https=config.https, timeout=config.timeout, verify_tls=config.verify_tls),
        match_on=config.match_on,
    )
    dispatcher = Dispatcher(pipeline, concurrency=config.concurrency)

    logger.info("Scanning %d targets with %d workers", len(targets), config.concurrency)
    return dispatcher.run(
        targets,
        only_vulnerable=config.only_vulnerable,
        on_outcome=console.outcome if console else None,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Subdomain Takeover Scanner - Detect dangling DNS records",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s --target blog.example.com,shop.example.com
  %(prog)s --targets subdomains.txt --https -c 50
  %(prog)s --targets subdomains.txt --vuln -o report.json
  %(prog)s --targets subdomains.txt -o report.md --format md
        """
    )

    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--target", help="Comma-separated list of subdomains")
    source.add_argument("--targets", help="File with one subdomain per line")

    parser.add_argument(
        "-c", "--concurrency",
        type=int,
        default=DEFAULT_CONCURRENCY,
        help=f"Number of concurrent checks (default: {DEFAULT_CONCURRENCY})"
    )
    parser.add_argument(
        "-t", "--timeout",
        type=int,
        default=DEFAULT_TIMEOUT,
        help=f"HTTP request timeout in seconds (default: {DEFAULT_TIMEOUT})"
    )
    parser.add_argument(
        "--https",
        action="store_true",
        help="Use HTTPS for targets given without a scheme"
    )
    parser.add_argument(
        "--verify-ssl",
        dest="verify_ssl",
        action="store_true",
        help="Only check targets with a valid TLS certificate"
    )
    parser.add_argument(
        "--vuln",
        action="store_true",
        help="Save only vulnerable subdomains"
    )
    parser.add_argument(
        "--hide-fails",
        dest="hide_fails",
        action="store_true",
        help="Print only potentially vulnerable subdomains"
    )
    parser.add_argument(
        "--emoji",
        action="store_true",
        help="Prefix status labels with emoji"
    )
    parser.add_argument(
        "--match-on",
        dest="match_on",
        choices=MATCH_ON,
        default="body",
        help="Evidence the fingerprints are matched against (default: body)"
    )
    parser.add_argument(
        "--fingerprints",
        help="Fingerprint catalog file or URL (default: bundled catalog)",
        default=None
    )
    parser.add_argument(
        "-o", "--output",
        help="Output file path",
        default=None
    )
    parser.add_argument(
        "-f", "--format",
        choices=OUTPUT_FORMATS,
        default="json",
        help="Output format (default: json)"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Log verbosity (-v, -vv)"
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}"
    )
    return parser


def configure_logging(verbosity: int):
    level = logging.WARNING
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    try:
        config = ScanConfig(
            concurrency=args.concurrency,
            timeout=args.timeout,
            https=args.https,
            verify_tls=args.verify_ssl,
            only_vulnerable=args.vuln,
            hide_fails=args.hide_fails,
            emoji=args.emoji,
            match_on=args.match_on,
            fingerprints=args.fingerprints,
            output=args.output,
            format=args.format,
        )
        targets = load_targets(target=args.target, targets_file=args.targets)
        console = Console(hide_fails=config.hide_fails, emoji=config.emoji)
        outcomes = run_scan(targets, config, console)
    except TakeoverError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if config.output:
        generator = ReportGenerator(outcomes)
        try:
            with open(config.output, "w") as f:
                f.write(generator.render(config.format))
        except OSError as e:
            print(f"Error: cannot write report: {e}", file=sys.stderr)
            return 1
        console.info(f"Saved output to {config.output!r}")

    # Exit code signals whether anything is takeover-prone
    if any(outcome.vulnerable for outcome in outcomes):
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
