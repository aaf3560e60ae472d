"""Postgres connection URL parsing."""

import logging
from urllib.parse import unquote, urlsplit

from .exceptions import ConnectionURLError, InvalidPortError, MissingHostError
from .models import ConnectionParams

DEFAULT_PORT = 5432
DEFAULT_DATABASE = "postgres"
DEFAULT_USER = "postgres"

POOLER_TRANSACTION_PORT = 6543
POOLER_SESSION_PORT = 5432

logger = logging.getLogger(__name__)


def parse_connection_url(url: str) -> ConnectionParams:
    """Parse a Postgres connection URL into connection parameters.

    Args:
        url: URL of the form scheme://[user[:password]@]host[:port][/database][?query].

    Returns:
        ConnectionParams for the URL.

    Raises:
        ConnectionURLError: If the URL cannot be parsed.
        MissingHostError: If the URL has no host.
        InvalidPortError: If the port is not an integer in 1-65535.
    """
    try:
        parsed = urlsplit(url.strip())
    except (ValueError, AttributeError) as e:
        raise ConnectionURLError(f"invalid db url: {e}") from e

    if not parsed.scheme:
        raise ConnectionURLError("invalid db url: missing scheme")

    host = parsed.hostname
    if not host:
        raise MissingHostError("invalid db url: missing host")

    port = _parse_port(parsed.netloc)

    database = parsed.path.lstrip("/") or DEFAULT_DATABASE

    user = DEFAULT_USER
    if parsed.username:
        user = unquote(parsed.username)
    password = unquote(parsed.password) if parsed.password is not None else ""

    return ConnectionParams(
        host=host,
        port=port,
        user=user,
        password=password,
        database=unquote(database),
    )


def _parse_port(netloc: str) -> int:
    """Extract the port from a URL authority, defaulting to 5432."""
    hostport = netloc.rpartition("@")[2]
    if hostport.startswith("["):
        # IPv6 literal: [::1]:5432
        _, _, rest = hostport.partition("]")
        port_text = rest[1:] if rest.startswith(":") else ""
    else:
        _, _, port_text = hostport.partition(":")

    if not port_text:
        return DEFAULT_PORT

    if not (port_text.isascii() and port_text.isdigit()):
        raise InvalidPortError(f"invalid db url: invalid port {port_text!r}")

    port = int(port_text, 10)
    if not 1 <= port <= 65535:
        raise InvalidPortError(f"invalid db url: invalid port {port_text!r} (must be 1-65535)")
    return port


def session_mode_url(url: str) -> str:
    """Switch a pooler URL from transaction mode to session mode.

    Transaction mode (port 6543) does not support prepared statements,
    which the supabase CLI relies on.
    """
    transaction = f":{POOLER_TRANSACTION_PORT}/"
    if transaction not in url:
        return url
    logger.debug(f"Rewriting pooler URL to session mode port {POOLER_SESSION_PORT}")
    return url.replace(transaction, f":{POOLER_SESSION_PORT}/", 1)
