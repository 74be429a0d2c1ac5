"""
Typed asynchronous client for the bitFlyer Lightning REST API.

Build a descriptor from :mod:`bitflyer_client.endpoints` and hand it to
:meth:`BitflyerClient.send`; the decoded, immutable response model comes
back, or one of the errors in :mod:`bitflyer_client.errors` is raised.
"""

from .client import BitflyerClient, send_public  # noqa: F401
from .config import ClientConfig, EnvFileSecretsManager  # noqa: F401
from .endpoints import *  # noqa: F401,F403
from .errors import (  # noqa: F401
    AuthError,
    BitflyerError,
    ConfigError,
    DecodeError,
    HttpError,
    SerializationError,
    UnexpectedBodyError,
    UrlBuildError,
)
from .models import *  # noqa: F401,F403
from .request import ENTRY_POINT, ApiRequest  # noqa: F401
from .signing import HmacSigner  # noqa: F401
from .timestamps import parse_optional_timestamp, parse_timestamp  # noqa: F401
from .transport import AiohttpTransport, HttpTransport, TransportResponse  # noqa: F401

__version__ = "0.1.0"
