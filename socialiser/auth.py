import base64
import json
import logging
import time

import httpx
from cryptography.hazmat.backends import default_backend
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import padding
from cryptography.x509 import load_pem_x509_certificate
from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from .config import FIREBASE_PROJECT_ID
from .database import get_db
from .models import User

logger = logging.getLogger(__name__)

security = HTTPBearer()

GOOGLE_CERTS_URL = (
    "https://www.googleapis.com/robot/v1/metadata/x509/securetoken@system.gserviceaccount.com"
)

# Cache for Google's public keys
_cached_keys = None


def _b64url_decode(segment: str) -> bytes:
    return base64.urlsafe_b64decode(segment + "=" * (-len(segment) % 4))


async def get_google_public_keys(refresh: bool = False):
    """Fetch (and cache) the x509 certificates Firebase signs ID tokens with"""
    global _cached_keys
    if _cached_keys and not refresh:
        return _cached_keys

    try:
        async with httpx.AsyncClient(timeout=10.0) as client:
            response = await client.get(GOOGLE_CERTS_URL)
        if response.status_code == 200:
            _cached_keys = response.json()
            logger.info(f"✅ Fetched {len(_cached_keys)} Google public keys")
            return _cached_keys
        logger.error(f"❌ Failed to fetch Google public keys: HTTP {response.status_code}")
    except httpx.HTTPError as e:
        logger.error(f"❌ Error fetching Google public keys: {str(e)}")
    return None


async def verify_firebase_token(token: str) -> dict:
    """
    Verify a Firebase ID token: RS256 signature against Google's published
    certificates, then audience, issuer and expiry claims.
    """
    if not FIREBASE_PROJECT_ID:
        logger.error("❌ FIREBASE_PROJECT_ID not configured")
        raise HTTPException(status_code=500, detail="Authentication not configured")

    parts = token.split(".")
    if len(parts) != 3:
        raise HTTPException(status_code=401, detail="Invalid token format")
    header_b64, payload_b64, signature_b64 = parts

    try:
        header = json.loads(_b64url_decode(header_b64))
        payload = json.loads(_b64url_decode(payload_b64))
        signature = _b64url_decode(signature_b64)
    except (ValueError, json.JSONDecodeError) as e:
        logger.warning(f"⚠️ Undecodable token: {e}")
        raise HTTPException(status_code=401, detail="Invalid token") from e

    kid = header.get("kid")
    if header.get("alg") != "RS256" or not kid:
        raise HTTPException(status_code=401, detail="Invalid token algorithm")

    public_keys = await get_google_public_keys()
    if not public_keys or kid not in public_keys:
        # Google rotates keys; refetch once before giving up
        public_keys = await get_google_public_keys(refresh=True)
        if not public_keys or kid not in public_keys:
            raise HTTPException(status_code=401, detail="Unable to verify token signature")

    cert = load_pem_x509_certificate(public_keys[kid].encode(), default_backend())
    try:
        cert.public_key().verify(
            signature,
            f"{header_b64}.{payload_b64}".encode(),
            padding.PKCS1v15(),
            hashes.SHA256(),
        )
    except Exception as e:
        logger.warning(f"⚠️ Token signature verification failed: {e}")
        raise HTTPException(status_code=401, detail="Invalid token signature") from e

    if payload.get("aud") != FIREBASE_PROJECT_ID:
        raise HTTPException(status_code=401, detail="Invalid token audience")
    if payload.get("iss") != f"https://securetoken.google.com/{FIREBASE_PROJECT_ID}":
        raise HTTPException(status_code=401, detail="Invalid token issuer")
    if payload.get("exp", 0) < time.time():
        raise HTTPException(
            status_code=401,
            detail="Token has expired. Please refresh your session.",
            headers={"X-Token-Expired": "true"},
        )

    return payload


async def get_current_user(
    request: Request,
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: Session = Depends(get_db),
) -> User:
    """Resolve the Firebase identity to a local user, creating it on first sign-in"""
    if not credentials:
        raise HTTPException(
            status_code=401,
            detail="Not authenticated. Please provide a valid Bearer token in the Authorization header.",
        )

    claims = await verify_firebase_token(credentials.credentials)
    firebase_uid = claims.get("sub") or claims.get("user_id")
    if not firebase_uid:
        logger.error(f"❌ Token missing user ID claim. Available claims: {list(claims.keys())}")
        raise HTTPException(status_code=401, detail="Invalid token claims")

    user = db.query(User).filter(User.firebase_uid == firebase_uid).first()
    if user:
        request.state.user_id = user.id
        return user

    logger.info(f"🆕 Creating new user: {claims.get('email')}")
    user = User(
        firebase_uid=firebase_uid,
        email=claims.get("email") or f"{firebase_uid}@users.invalid",
        name=claims.get("name", ""),
        preferences={},
    )
    db.add(user)
    try:
        db.commit()
        db.refresh(user)
    except Exception as e:
        db.rollback()
        if "unique" in str(e).lower() or "duplicate key" in str(e).lower():
            raise HTTPException(
                status_code=409,
                detail="This email is already registered. Please sign in with your existing account.",
            ) from e
        raise
    request.state.user_id = user.id
    return user

