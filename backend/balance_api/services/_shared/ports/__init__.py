"""
balance_api.services._shared.ports
==================================

*Ports* (hexagonal interfaces) the service layer depends on. Concrete
adapters live under ``balance_api.infra``.

Modules
-------
- :mod:`token_provider`:
    Defines :class:`~.TokenProvider`, the abstraction for signing and
    validating access and refresh tokens, and :class:`~.TokenClaims`.
"""

from __future__ import annotations

from .token_provider import ACCESS, REFRESH, TokenClaims, TokenProvider

__all__ = ["ACCESS", "REFRESH", "TokenClaims", "TokenProvider"]
