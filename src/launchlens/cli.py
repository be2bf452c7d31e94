"""Command-line interface for LaunchLens."""

import argparse
import json
import logging
import subprocess
import sys
from pathlib import Path

from . import __version__
from .core.config import settings
from .core.constants import FileConstants
from .core.exceptions import ConfigurationError, InputError, LaunchLensError
from .core.parsing import parse_reviews
from .services.analysis import AnalysisService
from .services.llm import LLMServiceFactory
from .services.session import UploadSession
from .utils.data_prep import export_to_json, prepare_export

logger = logging.getLogger(__name__)

DASHBOARD_PATH = Path(__file__).parent / "ui" / "streamlit_app.py"


def setup_logging():
    """Setup logging configuration."""
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format=FileConstants.LOG_FORMAT
    )


def cmd_inspect(args):
    """Inspect command: parse one CSV and show what was read."""
    with open(args.file, 'rb') as f:
        reviews = parse_reviews(f)

    print(f"Parsed {len(reviews)} reviews from '{args.file}'")

    if reviews:
        sample = reviews[0]
        print("\nSample review:")
        print(f"ID: {sample.id}")
        print(f"Rating: {sample.rating}")
        print(f"Text: {sample.review_text[:100]}...")
        print(f"Source: {sample.source}")


def cmd_analyze(args):
    """Analyze command: run the full pre/post launch pipeline."""
    session = UploadSession()
    with open(args.pre, 'rb') as pre_file, open(args.post, 'rb') as post_file:
        receipt = session.upload(pre_file, post_file)
    print(f"Loaded {receipt.pre_launch_count} pre-launch and {receipt.post_launch_count} post-launch reviews")

    service = AnalysisService(
        LLMServiceFactory.create(),
        parallel_sentiment=args.parallel or settings.parallel_sentiment,
    )
    print("Analyzing reviews...")
    result = session.analyze(service)

    if args.out:
        export_to_json(prepare_export(result), args.out)
        print(f"Results exported to {args.out}")

    comparison = result.comparison
    pre, post = comparison.pre_launch_sentiment, comparison.post_launch_sentiment
    print("\nLaunch Impact Summary:")
    print(f"Pre-launch:  {pre.positive} positive / {pre.negative} negative / {pre.neutral} neutral, "
          f"avg rating {pre.average_rating:.2f}")
    print(f"Post-launch: {post.positive} positive / {post.negative} negative / {post.neutral} neutral, "
          f"avg rating {post.average_rating:.2f}")
    print(f"Sentiment shift: {comparison.sentiment_shift:+.1f} points")

    if comparison.themes:
        print("\nThemes:")
        for i, theme in enumerate(comparison.themes, 1):
            print(f"  {i}. {theme.theme}: {theme.pre_count} -> {theme.post_count} "
                  f"({theme.change_rate:+.1f}%, {theme.sentiment})")

    impact = result.impact
    verdict = "SUCCESS" if impact.overall_success else "NEEDS ATTENTION"
    print(f"\nVerdict: {verdict} (score {impact.success_score:.1f}/100)")
    print(f"Summary: {impact.executive_summary}")


def cmd_export(args):
    """Export command."""
    with open(args.input_file, 'r', encoding='utf-8') as f:
        data = json.load(f)

    if args.pretty:
        print(json.dumps(data, indent=2, ensure_ascii=False))
    else:
        output_file = args.output or args.input_file.replace('.json', '_export.json')
        export_to_json(data, output_file)
        print(f"Exported to {output_file}")


def cmd_ui(args):
    """UI command: serve the upload-and-compare dashboard through Streamlit."""
    if not DASHBOARD_PATH.is_file():
        raise ConfigurationError(f"dashboard script is missing from the install: {DASHBOARD_PATH}")

    command = [sys.executable, "-m", "streamlit", "run", str(DASHBOARD_PATH)]
    if args.port:
        command += ["--server.port", str(args.port)]

    logger.info(f"Starting dashboard: {' '.join(command)}")
    returncode = subprocess.run(command).returncode
    if returncode:
        logger.error(f"Dashboard exited with status {returncode}")
        sys.exit(returncode)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="LaunchLens - Pre/Post Launch Review Analysis")
    parser.add_argument('--version', action='version', version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    # Inspect command
    inspect_parser = subparsers.add_parser('inspect', help='Parse a review CSV and show a sample')
    inspect_parser.add_argument('file', help='Review CSV file')

    # Analyze command
    analyze_parser = subparsers.add_parser('analyze', help='Compare pre- and post-launch reviews')
    analyze_parser.add_argument('pre', help='Pre-launch review CSV')
    analyze_parser.add_argument('post', help='Post-launch review CSV')
    analyze_parser.add_argument('--out', help='Output JSON file')
    analyze_parser.add_argument('--parallel', action='store_true', help='Score both batches concurrently')

    # Export command
    export_parser = subparsers.add_parser('export', help='Export analysis results')
    export_parser.add_argument('--in', dest='input_file', required=True, help='Input JSON file')
    export_parser.add_argument('--out', dest='output', help='Output file (optional)')
    export_parser.add_argument('--pretty', action='store_true', help='Pretty print to stdout')

    # UI command
    ui_parser = subparsers.add_parser('ui', help='Launch the web dashboard')
    ui_parser.add_argument('--port', type=int, help='Port for the Streamlit server')

    return parser


def main(argv=None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return

    setup_logging()

    commands = {
        'inspect': cmd_inspect,
        'analyze': cmd_analyze,
        'export': cmd_export,
        'ui': cmd_ui,
    }
    try:
        commands[args.command](args)
    except KeyboardInterrupt:
        print("\nOperation cancelled by user")
    except InputError as e:
        logger.error(f"Invalid input: {e}")
        sys.exit(2)
    except (LaunchLensError, OSError, json.JSONDecodeError) as e:
        logger.error(f"Command failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
