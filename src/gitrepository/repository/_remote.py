"""Remote URL normalization.

This module parses configured remote URLs in the HTTPS and SSH dialects into a
protocol-independent endpoint and renders both canonical URL forms from it.

Accepted forms:

- ``https://[user[:password]@]host[:443]/path``
- ``user@host:path`` (scp-like SSH)
- ``ssh://[user@]host[:22]/path``

Hosts must be DNS names. Bare IP addresses and non-default ports are
rejected rather than guessed at.
"""

import re
from collections.abc import Sequence

from gitrepository.enums import RemoteProtocol
from gitrepository.exceptions import UnrecognizedUrlError
from gitrepository.repository._models import RemoteEndpoint

_DEFAULT_PORTS: dict[RemoteProtocol, int] = {
    RemoteProtocol.HTTPS: 443,
    RemoteProtocol.SSH: 22,
}

_HOST_LABEL = r"[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?"
_HOST = rf"(?P<host>{_HOST_LABEL}(?:\.{_HOST_LABEL})*)"

_HTTPS_PATTERN = re.compile(
    rf"^https://(?:[^@/\s]+@)?{_HOST}(?::(?P<port>\d+))?/(?P<path>[^\s]+)$",
    re.IGNORECASE,
)
_SSH_URL_PATTERN = re.compile(
    rf"^ssh://(?:[^@/\s]+@)?{_HOST}(?::(?P<port>\d+))?/(?P<path>[^\s]+)$",
    re.IGNORECASE,
)
# scp-like syntax has no port; a numeric first path segment would be ambiguous
_SCP_PATTERN = re.compile(
    rf"^[A-Za-z0-9._-]+@{_HOST}:(?!\d+/)(?P<path>[^\s]+)$",
)


def _clean_path(raw: str) -> str:
    path = raw.strip("/")
    path = path.removesuffix(".git")
    return path.rstrip("/")


def _is_numeric_host(host: str) -> bool:
    # The last label of a DNS name is never all digits, an IPv4 address's is
    return host.rsplit(".", 1)[-1].isdigit()


def _identifier(path: str) -> str:
    segments = path.split("/")
    if len(segments) > 2:  # noqa: PLR2004
        return "/".join(segments[-2:])
    return path


def _match(url: str) -> tuple[RemoteProtocol, re.Match[str]] | None:
    if match := _HTTPS_PATTERN.match(url):
        return RemoteProtocol.HTTPS, match
    if match := _SSH_URL_PATTERN.match(url):
        return RemoteProtocol.SSH, match
    if match := _SCP_PATTERN.match(url):
        return RemoteProtocol.SSH, match
    return None


def build_remote_endpoint(
    protocol: RemoteProtocol, host: str, path: str
) -> RemoteEndpoint:
    """Build a RemoteEndpoint from already-validated parts.

    Args:
        protocol: Dialect of the original URL.
        host: Lowercase host name.
        path: Repository path without leading slash or `.git` suffix.

    Returns:
        The endpoint with both canonical URLs rendered.
    """
    endpoint = f"{host}/{path}"
    return RemoteEndpoint(
        protocol=protocol,
        host=host,
        path=path,
        endpoint=endpoint,
        identifier=_identifier(path),
        https_url=f"https://{endpoint}",
        ssh_url=f"git@{host}:{path}.git",
    )


def parse_remote_url(url: str) -> RemoteEndpoint:
    """Normalize a single remote URL.

    Args:
        url: Remote URL as configured, in HTTPS or SSH form.

    Returns:
        RemoteEndpoint for the URL.

    Raises:
        UnrecognizedUrlError: If the URL matches neither dialect, uses an IP
            address host or a non-default port, or has an empty path.

    Examples:
        >>> parse_remote_url("git@example.com:acme/widgets.git").https_url
        'https://example.com/acme/widgets'
        >>> parse_remote_url("https://example.com/acme/widgets").ssh_url
        'git@example.com:acme/widgets.git'
    """
    candidate = url.strip()
    matched = _match(candidate)
    if matched is None:
        msg = f"Unrecognized remote URL: {url!r}"
        raise UnrecognizedUrlError(msg, url=url)

    protocol, match = matched
    # DNS names are case-insensitive
    host = match.group("host").lower()
    if _is_numeric_host(host):
        msg = f"IP address hosts are not supported: {url!r}"
        raise UnrecognizedUrlError(msg, url=url)

    port = match.groupdict().get("port")
    if port is not None and int(port) != _DEFAULT_PORTS[protocol]:
        msg = f"Non-default port {port} is not supported: {url!r}"
        raise UnrecognizedUrlError(msg, url=url)

    path = _clean_path(match.group("path"))
    if not path or any(not segment for segment in path.split("/")):
        msg = f"Remote URL has no repository path: {url!r}"
        raise UnrecognizedUrlError(msg, url=url)

    return build_remote_endpoint(protocol, host, path)


def normalize_remote_urls(urls: Sequence[str]) -> RemoteEndpoint:
    """Normalize the configured URLs of a remote.

    The first URL is the primary one and determines the result.

    Args:
        urls: URLs in configuration order.

    Returns:
        RemoteEndpoint for the primary URL.

    Raises:
        UnrecognizedUrlError: If no URL is given or the primary URL is not
            recognized.
    """
    if not urls:
        msg = "No remote URL configured"
        raise UnrecognizedUrlError(msg)
    return parse_remote_url(urls[0])
