class ConfigurationError(Exception):
    """Base class for failures while building an App."""


class InvalidHostURL(ConfigurationError):
    """The host URL could not be parsed as a URL."""


class ClientConstructionError(ConfigurationError):
    """The outbound API client rejected its configuration."""


class CallbackURLDerivationError(ConfigurationError):
    """The auth callback URL could not be joined from host URL and path."""


class DomainPatternCompilationError(ConfigurationError):
    """Trusted shop domains do not produce a valid matching pattern."""


class InvalidShopDomain(ValueError):
    """A shop identifier was rejected by the shop domain matcher."""


class SessionStoreError(Exception):
    """A session store failed to read, write or delete a session."""
