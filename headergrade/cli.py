import argparse
import logging
import sys

from colorama import Fore, init

from headergrade.analyzer import HeaderAnalyzer
from headergrade.config import load_catalog
from headergrade.exceptions import HeaderGradeError
from headergrade.fetch import DEFAULT_TIMEOUT, fetch_headers, read_headers_from_file
from headergrade.report import export_results, print_results


def build_parser():
    parser = argparse.ArgumentParser(
        prog="headergrade",
        description="Score the security headers of an HTTP response.",
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--url", help="URL to fetch headers from")
    source.add_argument("--file", help="Local file with a saved response head")
    parser.add_argument("--config", help="Path to a JSON header weight catalog")
    parser.add_argument("--follow-redirects", action="store_true",
                        help="Follow redirects when fetching headers")
    parser.add_argument("--no-verify", action="store_true", help="Disable SSL certificate verification")
    parser.add_argument("--timeout", type=float, default=DEFAULT_TIMEOUT,
                        help="Per-attempt request timeout in seconds")
    parser.add_argument("--output", "-o", choices=["text", "json"], default="text", help="Output format")
    parser.add_argument("--export", help="Export results to file")
    parser.add_argument("--verbose", "-v", action="store_true", help="Show verbose output")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    init(autoreset=True)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        analyzer = HeaderAnalyzer(load_catalog(args.config))
        if args.url:
            headers, _, source = fetch_headers(
                args.url,
                follow_redirects=args.follow_redirects,
                verify_ssl=not args.no_verify,
                timeout=args.timeout,
            )
        else:
            headers, _, source = read_headers_from_file(args.file)
    except HeaderGradeError as e:
        print(f"{Fore.RED}{e}")
        return 1

    result = analyzer.analyze(headers)
    print_results(result, source, verbose=args.verbose, output_format=args.output)

    if args.export:
        try:
            export_results(result, args.export, source, output_format=args.output)
        except OSError as e:
            print(f"{Fore.RED}Error exporting results: {e}")
            return 1
        print(f"Results exported to {args.export}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
