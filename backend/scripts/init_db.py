#!/usr/bin/env python3
"""
Script: init_db.py
Purpose: Create the marketplace tables and optionally load demo data

This script:
1. Optionally drops products, transactions and notifications (--drop)
2. Creates the tables from the SQLAlchemy models
3. Optionally seeds three demo products and one escrowed transaction (--seed)

Usage:
    cd backend
    python scripts/init_db.py [--drop] [--seed]

Options:
    --drop    Drop existing tables first (destroys data)
    --seed    Insert the demo catalogue
"""

import sys
import argparse
import logging
from pathlib import Path
from datetime import datetime, timezone

# Add backend to path
BACKEND_DIR = Path(__file__).parent.parent
sys.path.insert(0, str(BACKEND_DIR))

from dotenv import load_dotenv

load_dotenv(BACKEND_DIR / '.env')

from agrimarket.core.database import Base, engine, get_db_connection_dict
from agrimarket import models  # noqa: F401  (registers tables on Base.metadata)

logger = logging.getLogger("init_db")

DEMO_PRODUCTS = [
    {
        "id": "PROD-001",
        "name": "Organic Apples",
        "description": "Fresh organic apples from local farms",
        "price": "25",
        "quantity": "50",
        "unit": "kg",
        "batch_id": "BATCH-A1234",
        "supplier": "Green Valley Farms",
        "location": "Farm Valley, CA",
        "date": datetime(2023, 11, 1, tzinfo=timezone.utc),
        "status": "Listed",
    },
    {
        "id": "PROD-002",
        "name": "Premium Rice",
        "description": "Premium quality rice, pesticide-free",
        "price": "45",
        "quantity": "100",
        "unit": "kg",
        "batch_id": "BATCH-R5678",
        "supplier": "Golden Fields",
        "location": "Green Fields, OR",
        "date": datetime(2023, 10, 28, tzinfo=timezone.utc),
        "status": "In Escrow",
    },
    {
        "id": "PROD-003",
        "name": "Organic Tomatoes",
        "description": "Vine-ripened organic tomatoes",
        "price": "18",
        "quantity": "75",
        "unit": "kg",
        "batch_id": "BATCH-T9012",
        "supplier": "Sunshine Organics",
        "location": "Sunny Hills, WA",
        "date": datetime(2023, 10, 25, tzinfo=timezone.utc),
        "status": "Listed",
    },
]

DEMO_TRANSACTIONS = [
    {
        "id": "TXN-001",
        "product_id": "PROD-002",
        "product_name": "Premium Rice",
        "quantity": "50",
        "unit": "kg",
        "amount": "2250",
        "buyer_wallet": "demo_buyer_wallet_address",
        "seller_wallet": "demo_seller_wallet_address",
        "escrow_account": "mock_escrow_account",
        "escrow_signature": "mock_escrow_signature",
        "date": datetime(2023, 10, 29, tzinfo=timezone.utc),
        "status": "In Escrow",
        "verified": False,
    },
]


def seed(conn) -> dict:
    """Insert demo rows, skipping any that already exist"""
    counts = {"products": 0, "transactions": 0}
    cursor = conn.cursor()
    try:
        for product in DEMO_PRODUCTS:
            cursor.execute("""
                INSERT INTO products (
                    id, name, description, price, quantity, unit,
                    batch_id, supplier, location, date, status
                ) VALUES (
                    %(id)s, %(name)s, %(description)s, %(price)s, %(quantity)s, %(unit)s,
                    %(batch_id)s, %(supplier)s, %(location)s, %(date)s, %(status)s
                )
                ON CONFLICT (id) DO NOTHING
            """, product)
            counts["products"] += cursor.rowcount

        for transaction in DEMO_TRANSACTIONS:
            cursor.execute("""
                INSERT INTO transactions (
                    id, product_id, product_name, quantity, unit, amount,
                    buyer_wallet, seller_wallet, escrow_account, escrow_signature,
                    date, status, verified
                ) VALUES (
                    %(id)s, %(product_id)s, %(product_name)s, %(quantity)s, %(unit)s, %(amount)s,
                    %(buyer_wallet)s, %(seller_wallet)s, %(escrow_account)s, %(escrow_signature)s,
                    %(date)s, %(status)s, %(verified)s
                )
                ON CONFLICT (id) DO NOTHING
            """, transaction)
            counts["transactions"] += cursor.rowcount

        conn.commit()
        return counts
    except Exception:
        conn.rollback()
        raise
    finally:
        cursor.close()


def main():
    parser = argparse.ArgumentParser(description="Create marketplace tables")
    parser.add_argument("--drop", action="store_true", help="Drop existing tables first")
    parser.add_argument("--seed", action="store_true", help="Insert demo data")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")

    if args.drop:
        logger.warning("Dropping marketplace tables")
        Base.metadata.drop_all(engine)

    logger.info("Creating marketplace tables...")
    Base.metadata.create_all(engine)
    logger.info("Tables ready: " + ", ".join(sorted(Base.metadata.tables)))

    if args.seed:
        conn = get_db_connection_dict()
        try:
            counts = seed(conn)
        finally:
            conn.close()
        logger.info(f"Seeded {counts['products']} products and {counts['transactions']} transactions")


if __name__ == "__main__":
    main()
