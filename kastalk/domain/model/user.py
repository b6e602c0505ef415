"""User aggregate root.

Users are bound 1:1 to a wallet address and are created the first time
that address performs an action requiring identity.
"""

from datetime import datetime

from pydantic import Field

from kastalk.domain.model.common import DomainModel
from kastalk.domain.value import UserId, WalletAddress


class User(DomainModel):
    """User aggregate root.

    Immutable after creation except for timestamps.
    """

    id: UserId
    wallet_address: WalletAddress
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)
