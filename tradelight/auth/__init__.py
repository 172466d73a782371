"""Identity providers for TradeLight."""

from tradelight.auth.base import AuthError, BaseIdentityProvider
from tradelight.auth.local import LocalIdentityProvider

__all__ = ["AuthError", "BaseIdentityProvider", "LocalIdentityProvider"]
