from enum import Enum
from typing import Union
import logging

logger = logging.getLogger(__name__)


class ApiVersion(str, Enum):
    V2023_04 = "2023-04"
    V2023_07 = "2023-07"
    LATEST = "latest"

    @property
    def release(self) -> str:
        """Concrete release name sent to the platform."""
        if self is ApiVersion.LATEST:
            return LATEST_RELEASE
        return self.value


LATEST_RELEASE = ApiVersion.V2023_07.value


def resolve_version(version: Union[ApiVersion, str, None]) -> ApiVersion:
    """
    Normalize a version token to a known ApiVersion.

    Unknown tokens fall back to ApiVersion.LATEST instead of raising.
    """
    if isinstance(version, ApiVersion):
        return version
    if isinstance(version, str):
        token = version.strip()
        for member in ApiVersion:
            if token == member.value or token.upper() == member.name:
                return member
    logger.warning(f"Unknown API version {version!r}, using {ApiVersion.LATEST.value}")
    return ApiVersion.LATEST
