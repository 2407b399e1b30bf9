from __future__ import annotations

import copy
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Protocol


class Wallet(Protocol):
    """The connected wallet, as far as the session cache cares."""

    @property
    def my_account(self) -> str | None: ...


@dataclass(slots=True)
class StaticWallet:
    my_account: str | None = None


# Turns the raw farm snapshot from the session endpoint into the in-memory game model.
MakeGame = Callable[[dict[str, Any]], Any]


def snapshot_game(farm: dict[str, Any]) -> dict[str, Any]:
    """Default game transform: a detached copy of the snapshot."""

    return copy.deepcopy(farm)


# Ambient readers for the signup context (referral link, signup method).
ContextProvider = Callable[[], str | None]


def no_value() -> str | None:
    return None
