"""Seedable random streams for map generation.

The engine never touches the global ``random`` module. Every draw it makes
(which candidate a node collapses to, which rotation that candidate is locked
in) goes through an ``rng`` argument, and this module is where those
arguments usually come from.

A provider holds one master seed. Each named domain gets its own
``random.Random`` seeded from ``crc32("<master seed>:<domain>")``, so a map
is reproducible from the master seed alone and a second consumer of
randomness never perturbs the map's sequence. Tests and scripts are free to
pass a bare ``random.Random`` instead.

Usage:
    from tilewave.util import rng
    rng.init(config.RANDOM_SEED)

    stream = rng.get(config.WFC_RNG_DOMAIN)
    generate_map(tile_map, stream)

    # After a GenerationFailure: reseed and run again. ``stream`` stays valid.
    rng.reset("burrito1:1")

Domain names are dotted, e.g. "map.wfc" or "bench.wfc".
"""

from __future__ import annotations

import zlib
from collections.abc import MutableSequence, Sequence
from random import Random
from typing import TYPE_CHECKING, TypeAlias, TypeVar

if TYPE_CHECKING:
    from tilewave.types import RandomSeed

T = TypeVar("T")


def derive_seed(master_seed: RandomSeed, domain: str) -> int | None:
    """Integer seed for ``domain`` under ``master_seed``; None stays unseeded."""
    if master_seed is None:
        return None
    # crc32 rather than hash(): str hashes are salted per interpreter run
    return zlib.crc32(f"{master_seed}:{domain}".encode())


class RNGStream:
    """Handle on one domain of a provider.

    The handle owns no state of its own. Every draw asks the provider for the
    domain's current generator, which is what lets a handle cached before
    ``reset()`` follow the new seed afterwards.
    """

    def __init__(self, provider: RNGProvider, domain: str) -> None:
        self._provider = provider
        self._domain = domain

    @property
    def domain(self) -> str:
        return self._domain

    @property
    def generator(self) -> Random:
        """The generator currently backing this domain."""
        return self._provider.generator_for(self._domain)

    def random(self) -> float:
        return self.generator.random()

    def randrange(self, start: int, stop: int | None = None, step: int = 1) -> int:
        """Same contract as ``Random.randrange``; used for every weighted draw."""
        return self.generator.randrange(start, stop, step)

    def choice(self, seq: Sequence[T]) -> T:
        return self.generator.choice(seq)

    def shuffle(self, items: MutableSequence) -> None:
        self.generator.shuffle(items)


# Anything the engine accepts as its source of randomness.
RNG: TypeAlias = Random | RNGStream


class RNGProvider:
    """Per-domain generators derived from a single master seed."""

    def __init__(self, master_seed: RandomSeed = None) -> None:
        self._master_seed = master_seed
        self._generators: dict[str, Random] = {}
        self._handles: dict[str, RNGStream] = {}

    @property
    def master_seed(self) -> RandomSeed:
        return self._master_seed

    def get(self, domain: str) -> RNGStream:
        """Stream handle for ``domain``. The same handle is returned every time."""
        handle = self._handles.get(domain)
        if handle is None:
            handle = self._handles[domain] = RNGStream(self, domain)
        return handle

    def generator_for(self, domain: str) -> Random:
        generator = self._generators.get(domain)
        if generator is None:
            generator = Random(derive_seed(self._master_seed, domain))
            self._generators[domain] = generator
        return generator

    def reset(self, master_seed: RandomSeed = None) -> None:
        """Switch to ``master_seed``; generators are rebuilt lazily on next draw."""
        self._master_seed = master_seed
        self._generators.clear()


# =============================================================================
# Shared provider
# =============================================================================

_provider: RNGProvider | None = None


def init(master_seed: RandomSeed = None) -> None:
    """Seed the shared provider, creating it on first use.

    Calling this again reseeds in place, so handles obtained through ``get``
    remain usable.
    """
    global _provider
    if _provider is None:
        _provider = RNGProvider(master_seed)
    else:
        _provider.reset(master_seed)


def get(domain: str) -> RNGStream:
    """Handle for ``domain`` on the shared provider (unseeded if never init'd)."""
    if _provider is None:
        init(None)
    assert _provider is not None
    return _provider.get(domain)


def reset(master_seed: RandomSeed = None) -> None:
    if _provider is None:
        raise RuntimeError("RNG not initialized - call rng.init() first")
    _provider.reset(master_seed)
