"""
AgriMarket - Backend API
Marketplace for agricultural suppliers and buyers with QR-verified escrow
"""
import time
import logging
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables before settings are read
env_path = Path(__file__).parent.parent / '.env'
load_dotenv(env_path)

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from agrimarket.api import products, transactions, verify, notifications, solana, realtime
from agrimarket.core.config import settings
from agrimarket.core.database import get_db_connection_dict_with_retry
from agrimarket.core.rate_limit import RateLimitMiddleware
from agrimarket.services.notification_service import connection_manager

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.API_TITLE,
    version=settings.API_VERSION,
    description=settings.API_DESCRIPTION
)

app.add_middleware(RateLimitMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_allowed_origins(),
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Schema mismatches are client errors: 400 with the validation details"""
    return JSONResponse(
        status_code=400,
        content={"detail": jsonable_encoder(exc.errors())},
    )


# Include API routers
app.include_router(products.router, prefix="/api/products", tags=["Products"])
app.include_router(transactions.router, prefix="/api/transactions", tags=["Transactions"])
app.include_router(verify.router, prefix="/api/verify", tags=["Verification"])
app.include_router(notifications.router, prefix="/api/notifications", tags=["Notifications"])
app.include_router(solana.router, prefix="/api/solana", tags=["Solana"])
app.include_router(realtime.router, tags=["Realtime"])


@app.get("/")
async def root():
    """API status"""
    return {
        "message": "AgriMarket API",
        "status": "online",
        "version": settings.API_VERSION,
        "websocket_clients": connection_manager.client_count,
    }


@app.get("/health")
async def health():
    """Health check - tests database connectivity"""
    start_time = time.time()

    db_status = "unknown"
    db_latency_ms = None
    db_error = None

    try:
        conn = get_db_connection_dict_with_retry(max_retries=1, retry_delay=0.5)
        cursor = conn.cursor()

        db_start = time.time()
        cursor.execute("SELECT 1")
        cursor.fetchone()
        db_latency_ms = round((time.time() - db_start) * 1000, 2)

        cursor.close()
        conn.close()
        db_status = "connected"
    except Exception as e:
        logger.warning(f"Health check could not reach the database: {e}")
        db_status = "disconnected"
        db_error = str(e)

    return {
        "status": "healthy" if db_status == "connected" else "degraded",
        "service": "agrimarket-api",
        "version": settings.API_VERSION,
        "database": {
            "status": db_status,
            "latency_ms": db_latency_ms,
            "error": db_error,
        },
        "total_latency_ms": round((time.time() - start_time) * 1000, 2)
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("agrimarket.main:app", host=settings.API_HOST, port=settings.API_PORT)
