"""API key guard for the /matching router.

Every /matching route (config, catalog, score, discover/{user_id}) depends on
verify_api_key. The key comes from the API_KEY setting; /, /health and the
docs stay open.
"""

from fastapi import Header, HTTPException

from gymmatch.config import settings


async def verify_api_key(
    x_api_key: str | None = Header(default=None, alias="X-API-Key"),
    authorization: str | None = Header(default=None),
) -> str:
    """Check the X-API-Key header, or else an Authorization: Bearer token.

    With API_KEY unset the guard is open and returns "". With it set, a
    missing or different key raises 401.
    """
    if settings.api_key is None:
        return ""

    key = x_api_key
    if key is None and authorization and authorization.startswith("Bearer "):
        key = authorization[7:].strip()

    if key != settings.api_key:
        raise HTTPException(status_code=401, detail="Invalid or missing API key")

    return key
