#!/usr/bin/env python3
"""CLI interface for regionhist."""

import argparse
import logging
import sys
from pathlib import Path

from .binning import RangeError
from .channels import compute_signature
from .config import HistogramConfig
from .export import output_histogram, read_histogram, write_histogram
from .image_io import load_image
from .models import Region
from .similarity import histogram_intersection

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Compute and compare per-channel region histograms",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    sig = subparsers.add_parser(
        "signature",
        help="Concatenated per-channel histogram of an image region",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    sig.add_argument("image", type=str, help="Path to input image")
    sig.add_argument("--bins", type=int, default=16,
                     help="Number of bins per channel")
    sig.add_argument("--range-min", type=float, default=None,
                     help="Lower bound of the value range (default: from image type)")
    sig.add_argument("--range-max", type=float, default=None,
                     help="Upper bound of the value range (default: from image type)")
    sig.add_argument("--region", type=int, nargs=4, metavar=("X", "Y", "W", "H"),
                     default=None, help="Region to histogram (default: whole image)")
    sig.add_argument("--workers", type=int, default=None,
                     help="Threads used to bin channels in parallel")
    sig.add_argument("--output", type=str, default=None,
                     help="Write the signature to this file instead of stdout")

    cmp = subparsers.add_parser(
        "compare",
        help="Histogram intersection of two exported histograms",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    cmp.add_argument("reference", type=str, help="Reference histogram file")
    cmp.add_argument("other", type=str, help="Histogram file to compare")
    return parser


def _run_signature(args: argparse.Namespace) -> int:
    if not Path(args.image).exists():
        print(f"Error: Image file not found: {args.image}")
        return 1

    try:
        region = None
        if args.region is not None:
            x, y, w, h = args.region
            region = Region(x=x, y=y, width=w, height=h)

        cfg = HistogramConfig(
            bins_per_channel=args.bins,
            range_min=args.range_min,
            range_max=args.range_max,
            region=region,
            num_workers=args.workers,
        )

        image = load_image(args.image)
        signature = compute_signature(image, cfg)
    except RangeError as e:
        print(f"Error: {e}")
        return 2
    except (ValueError, FileNotFoundError) as e:
        print(f"Error: {e}")
        return 1

    if args.output:
        write_histogram(signature, args.output)
        logger.info(f"Signature ({signature.size} bins) saved to {args.output}")
    else:
        output_histogram(signature)
        print()
    return 0


def _run_compare(args: argparse.Namespace) -> int:
    for path in (args.reference, args.other):
        if not Path(path).exists():
            print(f"Error: Histogram file not found: {path}")
            return 1

    try:
        reference = read_histogram(args.reference)
        other = read_histogram(args.other)
    except ValueError as e:
        print(f"Error: {e}")
        return 1

    score = histogram_intersection(reference, other)
    print(f"{score:.6f}")
    return 0


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for regionhist.

    Parses command-line arguments and runs the requested command.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    # Configure logging
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S"
    )

    if args.command == "signature":
        status = _run_signature(args)
    else:
        status = _run_compare(args)

    if status:
        sys.exit(status)


if __name__ == "__main__":
    main()
