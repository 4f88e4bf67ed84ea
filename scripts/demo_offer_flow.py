#!/usr/bin/env python3
"""
Walk an inquiry through the complete offer workflow.

Demonstrates:
1. Inquiry creation (Draft) and submission (Pending)
2. Conversion into a Proposal offer with KYC/suitability recorded
3. Preparing the offer (Wait) and sending it to the client
4. Client acceptance (simulated OTP)
5. Final approval (Confirmed)

Writes to the configured OFFER_DB_DIR.
"""

from __future__ import annotations

import argparse
import sys
from decimal import Decimal
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from domain.errors import WorkflowError
from domain.inquiry import InquirySource, InquiryStatus, InquiryUpdate, NewInquiry
from domain.offer import Offer, OfferStatus, OfferUpdate
from services.inquiry_service import convert_inquiry_to_offer, create_inquiry, update_inquiry
from services.offer_service import accept_offer, confirm_order, send_to_client, update_offer


def print_section(title: str) -> None:
    """Print a section header."""
    print()
    print("=" * 80)
    print(title)
    print("=" * 80)


def print_offer(offer: Offer) -> None:
    print(f"   Offer ID:     {offer.offer_id}")
    print(f"   Status:       {offer.status.value}")
    print(f"   KYC:          {offer.kyc_status.value}")
    print(f"   Suitability:  {offer.suitability_status.value}")


def run_flow(client_id: str, product_id: str, amount: Decimal, employee_id: str) -> int:
    print_section(f"OFFER FLOW: {client_id} / {product_id} / {amount}")

    print("\n1. Creating inquiry...")
    inquiry = create_inquiry(
        NewInquiry(
            source=InquirySource.WALK_IN,
            client_id=client_id,
            product_id=product_id,
            requested_amount=amount,
            created_by=employee_id,
            additional_remark="Created by demo_offer_flow.py",
        )
    )
    print(f"   Inquiry ID: {inquiry.inquiry_id} ({inquiry.status.value})")

    print("\n2. Submitting inquiry...")
    inquiry = update_inquiry(inquiry.inquiry_id, InquiryUpdate(status=InquiryStatus.PENDING))
    print(f"   Status: {inquiry.status.value}")

    print("\n3. Converting to offer...")
    offer = convert_inquiry_to_offer(inquiry.inquiry_id)
    print_offer(offer)

    print("\n4. Preparing offer (Wait)...")
    offer = update_offer(offer.offer_id, OfferUpdate(expected_return="5-7%", status=OfferStatus.WAIT))
    print(f"   Status: {offer.status.value}")

    try:
        print("\n5. Sending to client...")
        offer = send_to_client(offer.offer_id)
        print(f"   Sent at: {offer.sent_at}")

        print("\n6. Client accepts...")
        offer = accept_offer(offer.offer_id, client_id, "Bank Transfer")
        print(f"   Accepted at: {offer.accepted_at} (OTP verified: {offer.otp_verified})")

        print("\n7. Confirming order...")
        offer = confirm_order(offer.offer_id, employee_id)
        print(f"   Approved by {offer.approved_by} at {offer.approved_at}")
    except WorkflowError as e:
        print(f"\n   STOPPED: {e}")
        print_offer(offer)
        return 1

    print_section("RESULT")
    print_offer(offer)
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(description="Run an inquiry through the full offer workflow")
    parser.add_argument("--client", default="CLI-001", help="Client ID (default: CLI-001)")
    parser.add_argument("--product", default="PROD-001", help="Product ID (default: PROD-001)")
    parser.add_argument("--amount", type=Decimal, default=Decimal("500000"), help="Requested amount")
    parser.add_argument("--employee", default="EMP-001", help="Employee ID acting as creator/approver")
    args = parser.parse_args()

    return run_flow(args.client, args.product, args.amount, args.employee)


if __name__ == "__main__":
    sys.exit(main())
