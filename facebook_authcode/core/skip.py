"""
Policies deciding whether the user profile is loaded for an attempt.

A policy is one of three explicit variants chosen at configuration time:
a fixed boolean, a synchronous predicate, or an asynchronous predicate that
receives the access token.
"""

from dataclasses import dataclass
from typing import Awaitable, Callable


@dataclass(frozen=True)
class FixedSkip:
    """Always skip (or always load) the profile."""

    skip: bool = False

    async def should_skip(self, access_token: str) -> bool:
        return self.skip


@dataclass(frozen=True)
class SyncSkip:
    """Skip when a synchronous, argument-less predicate returns true."""

    predicate: Callable[[], bool]

    async def should_skip(self, access_token: str) -> bool:
        return bool(self.predicate())


@dataclass(frozen=True)
class AsyncSkip:
    """Skip when an asynchronous predicate of the access token returns true."""

    predicate: Callable[[str], Awaitable[bool]]

    async def should_skip(self, access_token: str) -> bool:
        return bool(await self.predicate(access_token))


SkipUserProfile = FixedSkip | SyncSkip | AsyncSkip

NEVER_SKIP = FixedSkip(False)


def as_skip_policy(value: "SkipUserProfile | bool | None") -> SkipUserProfile:
    """
    Normalize a configuration value into a skip policy.

    Plain booleans (and None) become FixedSkip. Callables are rejected:
    wrap them in SyncSkip or AsyncSkip so the calling convention is explicit.
    """
    if value is None:
        return NEVER_SKIP
    if isinstance(value, bool):
        return FixedSkip(value)
    if isinstance(value, (FixedSkip, SyncSkip, AsyncSkip)):
        return value
    raise TypeError(
        f"skip_user_profile must be a bool, FixedSkip, SyncSkip or AsyncSkip, "
        f"got {type(value).__name__}"
    )
