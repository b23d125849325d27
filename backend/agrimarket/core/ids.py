"""
Short random identifiers (PROD-xxxxxx, TXN-xxxxxx, BATCH-XXXXX)
"""
import secrets

# nanoid's URL-safe alphabet
ALPHABET = "useandom-26T198340PX75pxJACKVERYMINDBUSHWOLF_GQZbfghjklqvwyzrict"


def nanoid(size: int = 21) -> str:
    return "".join(secrets.choice(ALPHABET) for _ in range(size))


def new_product_id() -> str:
    return f"PROD-{nanoid(6)}"


def new_batch_id() -> str:
    return f"BATCH-{nanoid(5).upper()}"


def new_transaction_id() -> str:
    return f"TXN-{nanoid(6)}"
