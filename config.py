"""Configuration settings for the NETbilling gateway backend."""
import os
import re
from dataclasses import dataclass
from typing import List, Tuple

from dotenv import load_dotenv

load_dotenv()


class Config:
    """Application configuration."""

    # Application Configuration
    DEBUG = os.getenv('DEBUG', 'False').lower() == 'true'
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
    HOST = os.getenv('HOST', '0.0.0.0')
    PORT = int(os.getenv('PORT', '5000'))

    # NETbilling Configuration
    NETBILLING_ENV = os.getenv('NETBILLING_ENV', 'test')  # test | production
    NETBILLING_ACCOUNT_ID = os.getenv('NETBILLING_ACCOUNT_ID', '')
    NETBILLING_SITE_TAG = os.getenv('NETBILLING_SITE_TAG', '')

    # (connect, read) timeout for the direct-mode round-trip, in seconds
    NETBILLING_CONNECT_TIMEOUT = float(os.getenv('NETBILLING_CONNECT_TIMEOUT', '10'))
    NETBILLING_READ_TIMEOUT = float(os.getenv('NETBILLING_READ_TIMEOUT', '30'))


@dataclass(frozen=True)
class NetbillingSettings:
    """Read-only gateway settings handed to the API client."""

    account_id: str
    site_tag: str = ''
    environment: str = 'test'
    timeout: Tuple[float, float] = (10.0, 30.0)

    @property
    def is_production(self) -> bool:
        return self.environment == 'production'

    @classmethod
    def from_config(cls, config) -> 'NetbillingSettings':
        """Build settings from a Config-like object."""
        return cls(
            account_id=(getattr(config, 'NETBILLING_ACCOUNT_ID', '') or '').strip(),
            site_tag=sanitize_site_tag(getattr(config, 'NETBILLING_SITE_TAG', '')),
            environment=(getattr(config, 'NETBILLING_ENV', 'test') or 'test').lower(),
            timeout=(
                float(getattr(config, 'NETBILLING_CONNECT_TIMEOUT', 10)),
                float(getattr(config, 'NETBILLING_READ_TIMEOUT', 30)),
            ),
        )

    def validate(self) -> List[str]:
        """Return the names of missing settings; empty means usable."""
        missing = []
        if not self.account_id:
            missing.append('NETBILLING_ACCOUNT_ID')
        return missing


def sanitize_site_tag(site_tag: str) -> str:
    # only word characters, dashes and dots are accepted by the gateway
    return re.sub(r'[^\w\-.]', '', site_tag or '')
