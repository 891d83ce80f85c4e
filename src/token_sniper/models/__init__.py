# -*- coding: utf-8 -*-
"""Domain models."""

from token_sniper.models.buy_result import BuyErrorKind, BuyResult
from token_sniper.models.candidate import Candidate, CandidateSource
from token_sniper.models.processed_candidate import ProcessedCandidate
from token_sniper.models.token_info import TokenInfo
from token_sniper.models.wallet_balances import WalletBalances
from token_sniper.models.watched_identity import WatchedIdentity
from token_sniper.models.watched_wallet import WatchedWallet

__all__ = [
    "BuyErrorKind",
    "BuyResult",
    "Candidate",
    "CandidateSource",
    "ProcessedCandidate",
    "TokenInfo",
    "WalletBalances",
    "WatchedIdentity",
    "WatchedWallet",
]
