import re
import logging
from typing import Iterable, Tuple

from shopigo.core.errors import DomainPatternCompilationError

logger = logging.getLogger(__name__)

# Standard, legacy and regional hosting domains of the platform
DEFAULT_SHOP_DOMAINS: Tuple[str, ...] = ("myshopify.com", "shopify.com", "myshopify.io")

SUBDOMAIN_PATTERN = r"[a-zA-Z0-9][a-zA-Z0-9\-_]*"

_DOMAIN_SUFFIX = re.compile(r"^[a-zA-Z0-9](?:[a-zA-Z0-9\-_]*[a-zA-Z0-9])?(?:\.[a-zA-Z0-9](?:[a-zA-Z0-9\-_]*[a-zA-Z0-9])?)*$")


class ShopDomainMatcher:
    """
    Accepts shop identifiers of the form ``<subdomain>.<trusted suffix>``.

    The trusted suffixes are always the platform defaults plus the custom
    domains given here; a trailing run of ``/`` is tolerated.
    """

    def __init__(self, custom_domains: Iterable[str] = ()):
        custom = tuple(custom_domains)
        for domain in custom:
            if not isinstance(domain, str) or not _DOMAIN_SUFFIX.fullmatch(domain):
                raise DomainPatternCompilationError(f"Invalid shop domain suffix: {domain!r}")

        self._domains = DEFAULT_SHOP_DOMAINS + custom
        alternatives = "|".join(re.escape(d) for d in self._domains)
        try:
            self._pattern = re.compile(rf"^{SUBDOMAIN_PATTERN}\.({alternatives})/*$")
        except re.error as e:
            raise DomainPatternCompilationError(f"Failed to compile shop domain pattern: {e}") from e
        logger.debug(f"Compiled shop domain pattern for {self._domains}")

    @property
    def domains(self) -> Tuple[str, ...]:
        return self._domains

    @property
    def pattern(self) -> str:
        return self._pattern.pattern

    def matches(self, candidate: str) -> bool:
        if not isinstance(candidate, str):
            return False
        # fullmatch: "$" alone would also accept a trailing newline
        return self._pattern.fullmatch(candidate) is not None

    def __repr__(self) -> str:
        return f"ShopDomainMatcher(domains={self._domains!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ShopDomainMatcher):
            return NotImplemented
        return self._domains == other._domains

    def __hash__(self) -> int:
        return hash(self._domains)
