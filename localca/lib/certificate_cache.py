"""In-memory cache of issued leaf certificates keyed by canonical domain set."""

import threading
from collections.abc import Callable, Iterable, Iterator
from contextlib import contextmanager
from datetime import datetime, timedelta, timezone

from .ca_manager import CAManager
from .leaf_issuer import LeafCertificateIssuer
from .logging_config import LOGGER
from .models import CachedIssuance, CertificateBundle

Clock = Callable[[], datetime]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CertificateCache:
    """At-most-once issuance per domain set for the lifetime of this object.

    Construct one instance at startup and share it. A per-key lock makes
    overlapping first requests for the same domain set issue a single
    certificate. Entries stop being served ``renew_before`` ahead of the
    leaf's own expiry and are then re-issued on the next request.
    """

    def __init__(
        self,
        ca_manager: CAManager,
        issuer: LeafCertificateIssuer,
        renew_before: timedelta = timedelta(days=30),
        clock: Clock = _utcnow,
    ) -> None:
        self.ca_manager = ca_manager
        self.issuer = issuer
        self.renew_before = renew_before
        self._clock = clock
        self._entries: dict[str, CachedIssuance] = {}
        # key -> (lock, number of threads holding or waiting on it)
        self._key_locks: dict[str, tuple[threading.Lock, int]] = {}
        self._guard = threading.Lock()

    def __len__(self) -> int:
        return len(self._entries)

    def get_or_issue(self, raw_domains: Iterable[str]) -> CertificateBundle:
        """Return the cached bundle for raw_domains, issuing it on a miss.

        Raises:
            CertificateStoreError: If the CA cannot be loaded or persisted
            CACreationError: If a first-time CA cannot be generated
            CertificateGenerationError: If signing the leaf fails
        """
        domains = self.issuer.canonicalize(raw_domains)
        key = domains.cache_key

        cached = self._lookup(key)
        if cached is not None:
            return cached

        with self._key_lock(key):
            # Another thread may have filled the entry while we waited
            cached = self._lookup(key)
            if cached is not None:
                return cached

            LOGGER.info("Certificate cache miss for %s", key)
            ca = self.ca_manager.ensure_ca()
            bundle = self.issuer.issue(ca, domains)
            self._entries[key] = CachedIssuance(
                bundle=bundle,
                expires_at=self._clock()
                + timedelta(days=self.issuer.config.leaf_validity_days)
                - self.renew_before,
            )
            return bundle

    def clear(self) -> None:
        """Drop every cached bundle.

        Key locks are left alone, so a miss still in flight keeps serializing
        later callers for the same key.
        """
        with self._guard:
            self._entries.clear()

    def _lookup(self, key: str) -> CertificateBundle | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._clock() >= entry.expires_at:
            LOGGER.info("Cached certificate for %s is due for renewal", key)
            self._entries.pop(key, None)
            return None
        return entry.bundle

    @contextmanager
    def _key_lock(self, key: str) -> Iterator[None]:
        with self._guard:
            lock, users = self._key_locks.get(key, (threading.Lock(), 0))
            self._key_locks[key] = (lock, users + 1)
        try:
            with lock:
                yield
        finally:
            with self._guard:
                lock, users = self._key_locks[key]
                if users == 1:
                    del self._key_locks[key]
                else:
                    self._key_locks[key] = (lock, users - 1)
