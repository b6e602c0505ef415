"""Caller identity for HTTP routes.

The wallet address arrives already authenticated in the ``X-Wallet-Address``
header. It is passed through as-is; normalization happens in the domain.
"""

from typing import Annotated

from fastapi import Header, HTTPException, status

WalletAddressHeader = Annotated[str | None, Header(alias="X-Wallet-Address")]


def require_wallet_address(wallet_address: str | None) -> str:
    """Ensure a mutating request identified its caller.

    Raises:
        HTTPException: 401 if the identity header is missing or blank
    """
    if wallet_address is None or not wallet_address.strip():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="X-Wallet-Address header is required",
        )
    return wallet_address
