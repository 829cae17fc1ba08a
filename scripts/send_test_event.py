#!/usr/bin/env python3
"""
Send a signed product event to a webhook receiver.

Usage:
    python scripts/send_test_event.py --secret whsec_test123
    python scripts/send_test_event.py --url http://localhost:3000/webhooks/products \
        --event-type product.updated --secret whsec_test123
"""
import argparse
import logging
import sys

from product_receiver.config import configure_logging
from product_receiver.delivery import build_event, deliver_event
from product_receiver.models import EVENT_TYPES

SAMPLE_PRODUCT = {
    "id": 4,
    "name": "Sony WH-1000XM5",
    "price": 399.99,
    "sku": "SON-WH1-XM5-BLK",
    "category": "ELECTRONICS",
    "stockQuantity": 25,
}


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Send a signed product webhook")
    parser.add_argument("--url", default="http://localhost:3000/webhooks/products")
    parser.add_argument("--event-type", default="product.created", choices=EVENT_TYPES)
    parser.add_argument("--secret", default="", help="Shared webhook secret (omit to send unsigned)")
    parser.add_argument("--timeout", type=int, default=30)
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    configure_logging("INFO")

    event = build_event(args.event_type, SAMPLE_PRODUCT)
    success, status_code, error = deliver_event(args.url, event, args.secret, args.timeout)

    if success:
        print(f"✓ {event.event_id} accepted (status={status_code})")
        return 0

    logging.getLogger(__name__).error("Delivery failed (status=%d): %s", status_code, error)
    return 1


if __name__ == "__main__":
    sys.exit(main())
