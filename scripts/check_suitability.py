#!/usr/bin/env python3
"""
Check suitability of products for clients from the command line.

Runs the risk-tolerance check (and, with --offer-checks, the KYC/investment
group checks stored on new offers) for one or more client/product pairs
against the configured reference data.

Examples:
  python scripts/check_suitability.py CLI-001 PROD-003
  python scripts/check_suitability.py --pairs CLI-001:PROD-002 CLI-008:PROD-001
  python scripts/check_suitability.py CLI-004 PROD-001 --offer-checks
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Tuple

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from repositories.record_store import StorageIOError
from repositories.reference_repository import get_product
from services.suitability_service import check_suitability, compute_kyc_and_suitability


def _parse_pair(text: str) -> Tuple[str, str]:
    client_id, sep, product_id = text.partition(":")
    if not sep or not client_id or not product_id:
        raise argparse.ArgumentTypeError(f"Expected CLIENT:PRODUCT, got '{text}'")
    return client_id, product_id


def print_result(client_id: str, product_id: str, offer_checks: bool) -> bool:
    """Print the check for one pair; return whether it passed."""

    result = check_suitability(client_id, product_id)
    status = "PASS" if result.is_suitable else "FAIL"

    print(f"\n[{status}] {client_id} -> {product_id}")
    print(f"   Client Risk:  {result.client_risk.value if result.client_risk else 'N/A'}")
    print(f"   Product Risk: {result.product_risk.value if result.product_risk else 'N/A'}")
    print(f"   Reason:       {result.reason}")

    if offer_checks:
        product = get_product(product_id)
        if product is None:
            print("   Offer checks: skipped (product not found)")
        else:
            checks = compute_kyc_and_suitability(client_id, product.risk_level)
            print(f"   Offer KYC:          {checks.kyc_status.value}")
            print(f"   Offer Suitability:  {checks.suitability_status.value}")

    return result.is_suitable


def main() -> int:
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="Check client/product suitability against reference data",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__.split("Examples:", 1)[1] if __doc__ else None,
    )
    parser.add_argument("client_id", nargs="?", help="Client ID (e.g., CLI-001)")
    parser.add_argument("product_id", nargs="?", help="Product ID (e.g., PROD-001)")
    parser.add_argument(
        "--pairs",
        nargs="+",
        type=_parse_pair,
        default=[],
        metavar="CLIENT:PRODUCT",
        help="Additional client/product pairs to check",
    )
    parser.add_argument(
        "--offer-checks",
        action="store_true",
        help="Also show the KYC / investment-group results a new offer would record",
    )

    args = parser.parse_args()

    pairs: List[Tuple[str, str]] = []
    if args.client_id and args.product_id:
        pairs.append((args.client_id, args.product_id))
    elif args.client_id or args.product_id:
        parser.error("client_id and product_id must be given together")
    pairs.extend(args.pairs)

    if not pairs:
        parser.error("no client/product pair given")

    print("=" * 80)
    print("Suitability Check")
    print("=" * 80)

    try:
        results = [print_result(client_id, product_id, args.offer_checks) for client_id, product_id in pairs]
    except StorageIOError as e:
        print(f"\nFATAL ERROR: {e}", file=sys.stderr)
        return 1

    print()
    print("=" * 80)
    print(f"Suitable: {sum(results)} / {len(results)}")

    # Non-zero exit when any pair is unsuitable
    return 0 if all(results) else 2


if __name__ == "__main__":
    sys.exit(main())
