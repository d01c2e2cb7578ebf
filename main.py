"""Simple CLI entry to exercise the itinerary builder helpers."""

import argparse
import json
from pathlib import Path

from itinerary_builder import CostInputs, NightBreakup, compress_image, reconcile_pricing
from itinerary_builder.config import configure_logging
from itinerary_builder.models import to_dict


def load_cost_inputs(path: Path) -> CostInputs:
    data = json.loads(path.read_text())
    breakup = [NightBreakup(**item) for item in data.pop("night_breakup", [])]
    return CostInputs(night_breakup=breakup, **data)


def run_reconcile(args: argparse.Namespace) -> None:
    pricing = load_cost_inputs(args.pricing_file)
    reconcile_pricing(pricing)
    print(json.dumps(to_dict(pricing), indent=2))


def run_compress(args: argparse.Namespace) -> None:
    result = compress_image(
        args.image_file.read_bytes(),
        max_width=args.max_width,
        max_height=args.max_height,
        target_bytes=args.target_bytes,
    )
    output = args.output or args.image_file.with_name(f"{args.image_file.stem}-compressed.jpg")
    output.write_bytes(result.data)
    print(
        f"Saved {result.width}x{result.height} JPEG at quality {result.quality} "
        f"({result.size_bytes} bytes) to {output}"
    )


def main() -> None:
    parser = argparse.ArgumentParser(description="Itinerary builder utilities.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    reconcile = subparsers.add_parser("reconcile", help="Recompute travellers and total cost")
    reconcile.add_argument("pricing_file", type=Path, help="Path to a JSON file with the pricing block")
    reconcile.set_defaults(func=run_reconcile)

    compress = subparsers.add_parser("compress", help="Compress an image for PDF embedding")
    compress.add_argument("image_file", type=Path, help="Image to compress")
    compress.add_argument("--output", type=Path, help="Where to write the JPEG")
    compress.add_argument("--max-width", type=int)
    compress.add_argument("--max-height", type=int)
    compress.add_argument("--target-bytes", type=int)
    compress.set_defaults(func=run_compress)

    args = parser.parse_args()
    configure_logging()
    args.func(args)


if __name__ == "__main__":
    main()
