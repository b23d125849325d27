"""
Marketplace Service
Product listing, purchase into escrow and QR verification

Handles:
- Product creation (IDs, batch IDs, listing status)
- QR code generation for a product batch
- Purchase: stock check, escrow creation, transaction + stock update
- Verification: QR signature check, escrow release, transaction status
"""
import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from agrimarket.core.config import settings
from agrimarket.core.database import get_db_connection_dict_with_retry
from agrimarket.core.exceptions import ProductNotFoundError, InsufficientQuantityError
from agrimarket.core.ids import new_product_id, new_batch_id, new_transaction_id
from agrimarket.domain.product import Product, ProductCreate, ProductStatus
from agrimarket.domain.transaction import (
    Transaction,
    TransactionStatus,
    PurchaseRequest,
    VerificationResult,
)
from agrimarket.repositories.product_repository import ProductRepository
from agrimarket.repositories.transaction_repository import TransactionRepository
from agrimarket.services.escrow_service import EscrowService
from agrimarket.services.qr_service import QRService

logger = logging.getLogger(__name__)


def _as_text(value: Any) -> Optional[str]:
    return None if value is None else str(value)


class MarketplaceService:
    """Business flows that span products, transactions and escrow"""

    def __init__(
        self,
        products: Optional[ProductRepository] = None,
        transactions: Optional[TransactionRepository] = None,
        escrow: Optional[EscrowService] = None,
        qr: Optional[QRService] = None
    ):
        self.products = products or ProductRepository()
        self.transactions = transactions or TransactionRepository()
        self.escrow = escrow or EscrowService()
        self.qr = qr or QRService()

    # ------------------------------------------------------------------
    # Products
    # ------------------------------------------------------------------

    def create_product(self, data: ProductCreate) -> Product:
        """List a new product with fresh product and batch IDs"""
        product = Product(
            id=new_product_id(),
            batch_id=new_batch_id(),
            date=datetime.now(timezone.utc),
            status=ProductStatus.LISTED,
            **data.model_dump(),
        )
        created = self.products.create(product)
        logger.info(f"Listed {created.id} ({created.name}, batch {created.batch_id})")
        return created

    def generate_product_qr(self, product_id: str) -> str:
        """
        Sign the product's batch metadata and render it as a QR code

        Raises:
            ProductNotFoundError
        """
        product = self.products.find_by_id(product_id)
        if not product:
            raise ProductNotFoundError(product_id)

        signed = self.qr.sign_product_data({
            "productId": product.id,
            "batchId": product.batch_id,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        })
        return self.qr.generate_qr_code(json.dumps(signed))

    # ------------------------------------------------------------------
    # Purchase
    # ------------------------------------------------------------------

    def seller_wallet_for(self, product: Product) -> str:
        return product.supplier_wallet or settings.DEMO_SELLER_WALLET

    def purchase(self, request: PurchaseRequest) -> Transaction:
        """
        Buy a quantity of a product and hold the payment in escrow

        The stock check, transaction insert and stock decrement run in one
        database transaction with the product row locked, so two concurrent
        purchases cannot both take the last units.

        Raises:
            ProductNotFoundError: unknown product
            InsufficientQuantityError: requested more than available
        """
        conn = get_db_connection_dict_with_retry()
        try:
            product = self.products.find_by_id(request.product_id, conn=conn, for_update=True)
            if not product:
                raise ProductNotFoundError(request.product_id)

            if request.quantity > product.quantity:
                raise InsufficientQuantityError(request.quantity, product.quantity)

            buyer_wallet = request.buyer_wallet or settings.DEMO_BUYER_WALLET
            seller_wallet = self.seller_wallet_for(product)
            amount = product.price * request.quantity

            escrow = self.escrow.create_escrow(buyer_wallet, seller_wallet, amount)

            transaction = self.transactions.create(Transaction(
                id=new_transaction_id(),
                product_id=product.id,
                product_name=product.name,
                quantity=request.quantity,
                unit=product.unit,
                amount=amount,
                buyer_wallet=buyer_wallet,
                seller_wallet=seller_wallet,
                escrow_account=escrow.escrow_account,
                escrow_signature=escrow.signature,
                date=datetime.now(timezone.utc),
                status=TransactionStatus.IN_ESCROW,
                verified=False,
            ), conn=conn)

            remaining = product.quantity - request.quantity
            status = ProductStatus.SOLD_OUT if remaining <= 0 else ProductStatus.LISTED
            self.products.update_stock(product.id, remaining, status, conn=conn)

            conn.commit()
            logger.info(f"{transaction.id}: {request.quantity} {product.unit} of {product.id} in escrow")
            return transaction

        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    # ------------------------------------------------------------------
    # Verification
    # ------------------------------------------------------------------

    def verify(self, qr_data: str) -> VerificationResult:
        """
        Verify a scanned QR code and release the product's escrow

        An invalid signature changes nothing and echoes the scanned fields.

        Raises:
            InvalidQRCodeError: payload is not a JSON object
            ProductNotFoundError: signature valid but product is gone
        """
        scanned: Dict[str, Any] = self.qr.verify_qr_code(qr_data)

        if not scanned["signatureValid"]:
            return self._echo_scan(scanned)

        product_id = scanned["productId"]
        product = self.products.find_by_id(product_id)
        if not product:
            raise ProductNotFoundError(product_id)

        transaction = self.transactions.find_in_escrow_by_product_id(product_id)
        if transaction and transaction.escrow_account:
            self.escrow.release_escrow(transaction.escrow_account, transaction.seller_wallet)
            self.transactions.mark_verified(transaction.id)
            logger.info(f"{transaction.id} verified, escrow {transaction.escrow_account} released")
        else:
            logger.info(f"{product_id} verified with no transaction in escrow")

        return VerificationResult(
            product_id=product.id,
            product_name=product.name,
            batch_id=product.batch_id,
            timestamp=_as_text(scanned.get("timestamp")),
            signature_valid=True,
        )

    @staticmethod
    def _echo_scan(scanned: Dict[str, Any]) -> VerificationResult:
        """Invalid scan: every scanned field comes back, nothing is trusted"""
        fields = VerificationResult.model_fields
        reserved = set(fields) | {field.alias for field in fields.values()}
        extra = {key: value for key, value in scanned.items() if key not in reserved}
        return VerificationResult.model_validate({
            **extra,
            "productId": _as_text(scanned.get("productId")),
            "productName": _as_text(scanned.get("productName")),
            "batchId": _as_text(scanned.get("batchId")),
            "timestamp": _as_text(scanned.get("timestamp")),
            "signatureValid": False,
        })
