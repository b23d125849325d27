"""
Escrow Service - simulated escrow for USDC payments

Nothing here touches a ledger or a chain. Accounts and signatures are
placeholders built from the current time in milliseconds.
"""
import time
import secrets
import logging
from dataclasses import dataclass
from decimal import Decimal

from agrimarket.core.config import settings
from agrimarket.core.exceptions import EscrowError

logger = logging.getLogger(__name__)

# Demo server key, regenerated on every process start
_SERVER_PUBLIC_KEY = secrets.token_hex(32)


@dataclass
class EscrowResult:
    escrow_account: str
    signature: str


def _now_ms() -> int:
    return int(time.time() * 1000)


class EscrowService:
    """Create and release placeholder escrow accounts"""

    def create_escrow(self, buyer_wallet: str, seller_wallet: str, amount: Decimal) -> EscrowResult:
        """
        Hold funds from buyer to seller

        Returns:
            EscrowResult with escrow_<ms> account and sig_<ms> signature
        """
        try:
            stamp = _now_ms()
            result = EscrowResult(escrow_account=f"escrow_{stamp}", signature=f"sig_{stamp}")
            logger.info(f"Created escrow for {amount} USDC from {buyer_wallet} to {seller_wallet}")
            return result
        except Exception as e:
            logger.error(f"Error creating escrow: {e}")
            raise EscrowError("Failed to create escrow") from e

    def release_escrow(self, escrow_account: str, seller_wallet: str) -> str:
        """
        Release escrowed funds to the seller

        Returns:
            release_<ms> signature
        """
        try:
            signature = f"release_{_now_ms()}"
            logger.info(f"Released funds from {escrow_account} to {seller_wallet}")
            return signature
        except Exception as e:
            logger.error(f"Error releasing funds from escrow: {e}")
            raise EscrowError("Failed to release escrow funds") from e

    @staticmethod
    def server_public_key() -> str:
        return _SERVER_PUBLIC_KEY

    @staticmethod
    def endpoint() -> str:
        return settings.SOLANA_ENDPOINT
