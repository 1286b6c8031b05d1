"""
Command-Line Interface for Vicinity Vibe
========================================

Usage:
    python -m vicinity_vibe.cli [vibe] [options]

    or

    vicinity-vibe [vibe] [options]

Options:
    --candidates, -c  JSON file with an array of profiles (default: mock roster)
    --num, -n         Number of results to show (default: all)
    --threshold       Match threshold (default: 0.65)
    --seed            Seed the jitter for a reproducible ranking
    --no-jitter       Disable the random jitter entirely
    --search, -s      Only rank profiles whose name or vibe contains this text
    --format          Output format: json, csv or simple (default: json)
    --output, -o      Output file path (default: stdout)
    --spin            Spin the boredom roulette instead of ranking
    --verbose, -v     Debug logging on stderr

Examples:
    python -m vicinity_vibe.cli "Nightlife Coffee"
    python -m vicinity_vibe.cli "live music" -c people.json -n 3 --format simple
    python -m vicinity_vibe.cli --spin --seed 7
"""

import argparse
import csv
import io
import json
import logging
import random
import sys
from typing import Optional, List

from .matcher import VibeMatcher, MatchReport
from .features import load_profiles, VibeProfile
from .scoring import no_jitter
from .roulette import spin
from .config import (
    MATCH_THRESHOLD,
    OUTPUT_FORMAT,
    SAMPLE_PROFILES,
    LOG_FORMAT,
    LOG_DATE_FORMAT,
)

logger = logging.getLogger(__name__)


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for CLI."""
    parser = argparse.ArgumentParser(
        prog='vicinity-vibe',
        description='💖 Vicinity Vibe - rank the people nearby by vibe',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s "Nightlife Coffee"
  %(prog)s "live music" -c people.json -n 3 --format simple
  %(prog)s --spin --seed 7

Environment Variables:
  VICINITY_VIBE_MATCH_THRESHOLD  Default match threshold (0.65)
        """
    )

    parser.add_argument(
        'vibe',
        type=str,
        nargs='?',
        default='',
        help='Your current vibe, e.g. "coffee jazz" (default: empty)'
    )

    parser.add_argument(
        '-c', '--candidates',
        type=str,
        default=None,
        help='JSON file with an array of profiles (default: built-in mock roster)'
    )

    parser.add_argument(
        '-n', '--num',
        type=int,
        default=None,
        help='Number of results to show (default: all)'
    )

    parser.add_argument(
        '--threshold',
        type=float,
        default=MATCH_THRESHOLD,
        help=f'Match threshold, strict (default: {MATCH_THRESHOLD})'
    )

    jitter = parser.add_mutually_exclusive_group()
    jitter.add_argument(
        '--seed',
        type=int,
        default=None,
        help='Seed the random jitter for a reproducible run'
    )
    jitter.add_argument(
        '--no-jitter',
        action='store_true',
        help='Disable the random jitter'
    )

    parser.add_argument(
        '-s', '--search',
        type=str,
        default=None,
        help='Only rank profiles whose name or vibe contains this text'
    )

    parser.add_argument(
        '--format',
        type=str,
        choices=['json', 'csv', 'simple'],
        default=OUTPUT_FORMAT,
        help=f'Output format (default: {OUTPUT_FORMAT})'
    )

    parser.add_argument(
        '-o', '--output',
        type=str,
        default=None,
        help='Output file path (default: print to stdout)'
    )

    parser.add_argument(
        '--spin',
        action='store_true',
        help='Spin the boredom roulette instead of ranking'
    )

    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable debug logging'
    )

    return parser


def configure_logging(verbose: bool) -> None:
    """Send log records to stderr, DEBUG when verbose."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        stream=sys.stderr,
    )


def format_output(report: MatchReport, fmt: str) -> str:
    """Format the ranking based on requested format."""
    if fmt == 'json':
        return report.to_json(indent=2)

    elif fmt == 'csv':
        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator='\n')
        writer.writerow(['id', 'name', 'vibe', 'distance', 'score', 'matched', 'explanation'])
        for r in report.results:
            writer.writerow([
                r.profile.id or '',
                r.profile.name or '',
                r.profile.vibe,
                r.profile.distance if r.profile.distance is not None else '',
                f"{r.score:.4f}",
                'yes' if r.matched else 'no',
                r.explanation.summary,
            ])
        return buffer.getvalue().rstrip('\n')

    elif fmt == 'simple':
        lines = [
            f"💖 Vibes near: {report.self_vibe or '(no vibe set)'}",
            f"   Candidates: {report.candidate_count}",
            f"   Matches: {len(report.matches)} (threshold {report.threshold})",
            "",
            "-" * 50,
        ]
        for i, r in enumerate(report.results, 1):
            flag = "  ✓ MATCH" if r.matched else ""
            lines.append(f"{i:2}. {r.profile.name or r.profile.id or 'Unknown'}{flag}")
            lines.append(f"    Vibe: {r.profile.vibe}")
            lines.append(f"    Score: {r.score:.4f} ({r.explanation.match_percent}%, {r.explanation.tier})")
            lines.append(f"    Why: {r.explanation.summary}")
            lines.append("")
        return '\n'.join(lines)

    return report.to_json()


def _load_candidates(path: Optional[str]) -> List[VibeProfile]:
    if path is None:
        return [VibeProfile.from_dict(p) for p in SAMPLE_PROFILES]
    return load_profiles(path)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    configure_logging(args.verbose)

    if args.no_jitter:
        rng_fn = no_jitter
    elif args.seed is not None:
        rng_fn = random.Random(args.seed).random
    else:
        rng_fn = None

    if args.spin:
        result = spin(rng_fn=rng_fn)
        print(f"🎰 Your vibe is: {result}")
        return 0

    try:
        candidates = _load_candidates(args.candidates)
    except (OSError, json.JSONDecodeError, ValueError) as e:
        print(f"❌ Error: {str(e)}", file=sys.stderr)
        if args.verbose:
            logger.exception("Could not load candidates")
        return 1

    matcher = VibeMatcher(threshold=args.threshold, rng_fn=rng_fn)
    report = matcher.rank(
        args.vibe,
        candidates,
        n=args.num,
        query=args.search,
        include_breakdown=args.verbose,
    )

    output = format_output(report, args.format)

    if args.output:
        with open(args.output, 'w', encoding='utf-8') as f:
            f.write(output)
        print(f"✅ Results saved to: {args.output}")
    else:
        print(output)

    return 0


if __name__ == '__main__':
    sys.exit(main())
