"""
Marketplace domain errors

Raised by services and repositories, translated to HTTP status codes
at the route boundary.
"""


class MarketplaceError(Exception):
    """Base class for marketplace errors"""
    status_code = 500


class ProductNotFoundError(MarketplaceError):
    status_code = 404

    def __init__(self, product_id: str):
        self.product_id = product_id
        super().__init__("Product not found")


class TransactionNotFoundError(MarketplaceError):
    status_code = 404

    def __init__(self, transaction_id: str):
        self.transaction_id = transaction_id
        super().__init__("Transaction not found")


class InsufficientQuantityError(MarketplaceError):
    status_code = 400

    def __init__(self, requested, available):
        self.requested = requested
        self.available = available
        super().__init__("Requested quantity exceeds available stock")


class InvalidQRCodeError(MarketplaceError):
    status_code = 400

    def __init__(self, reason: str = "Invalid QR code data"):
        super().__init__(reason)


class NotificationNotFoundError(MarketplaceError):
    status_code = 404

    def __init__(self, notification_id: int):
        self.notification_id = notification_id
        super().__init__(f"Notification {notification_id} not found")


class EscrowError(MarketplaceError):
    status_code = 500
