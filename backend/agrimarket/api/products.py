"""
Products API Endpoints
Supplier listings, buyer catalogue and product QR codes
"""
from fastapi import APIRouter, HTTPException, Depends

from agrimarket.api.dependencies import get_product_repository, get_marketplace_service
from agrimarket.core.exceptions import MarketplaceError
from agrimarket.domain.product import ProductCreate
from agrimarket.repositories.product_repository import ProductRepository
from agrimarket.services.marketplace_service import MarketplaceService

router = APIRouter()


@router.get("/supplier")
async def get_supplier_products(repo: ProductRepository = Depends(get_product_repository)):
    """All listings, newest first, regardless of status"""
    try:
        products = repo.find_all()
        return {
            "status": "success",
            "count": len(products),
            "data": [product.to_dict() for product in products]
        }
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error fetching products: {str(e)}")


@router.get("/available")
async def get_available_products(repo: ProductRepository = Depends(get_product_repository)):
    """Listings buyers can purchase (status Listed, quantity > 0)"""
    try:
        products = repo.find_available()
        return {
            "status": "success",
            "count": len(products),
            "data": [product.to_dict() for product in products]
        }
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error fetching available products: {str(e)}")


@router.post("", status_code=201)
async def create_product(
    product: ProductCreate,
    service: MarketplaceService = Depends(get_marketplace_service)
):
    """
    Create a product listing

    Assigns the product ID, batch ID and listing date; status starts as Listed.
    """
    try:
        created = service.create_product(product)
        return {
            "status": "success",
            "data": created.to_dict()
        }
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error creating product: {str(e)}")


@router.get("/{product_id}")
async def get_product(product_id: str, repo: ProductRepository = Depends(get_product_repository)):
    try:
        product = repo.find_by_id(product_id)
        if not product:
            raise HTTPException(status_code=404, detail="Product not found")

        return {
            "status": "success",
            "data": product.to_dict()
        }
    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error fetching product: {str(e)}")


@router.get("/{product_id}/qrcode")
async def get_product_qrcode(
    product_id: str,
    service: MarketplaceService = Depends(get_marketplace_service)
):
    """
    Signed QR code for a product batch

    Returns:
        {"qrCodeBase64": "data:image/png;base64,..."}
    """
    try:
        return {"qrCodeBase64": service.generate_product_qr(product_id)}
    except MarketplaceError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error generating QR code: {str(e)}")
