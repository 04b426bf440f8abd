"""
IPFS URL helpers.

Content on IPFS is addressed as ``ipfs://<cid>/<path>``, which browsers cannot
fetch. The configured gateway template (for example
``https://nftstorage.link/ipfs/PATH``) turns such a URL into plain HTTPS.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from badges_server.core.errors import InvalidGatewayTemplateError

if TYPE_CHECKING:
    from badges_server.core.config import ServerSettings

IPFS_PREFIX = "ipfs://"
PATH_PLACEHOLDER = "PATH"


def validate_gateway_template(template: str) -> str:
    """Return ``template`` if it holds exactly one ``PATH`` placeholder."""
    occurrences = template.count(PATH_PLACEHOLDER)
    if occurrences != 1:
        raise InvalidGatewayTemplateError(
            f"IPFS gateway template must contain {PATH_PLACEHOLDER!r} exactly once, "
            f"found {occurrences} in {template!r}",
            key="NEXT_PUBLIC_IPFS_GATEWAY_TEMPLATE",
        )
    return template


def is_ipfs_url(url: str) -> bool:
    # Case-sensitive and anchored: "IPFS://x" and "https://x/ipfs://y" do not match.
    return url.startswith(IPFS_PREFIX)


def transform_ipfs_url(ipfs_url: str, settings: Optional[ServerSettings] = None) -> str:
    """Convert an ``ipfs://`` URL to an HTTPS gateway URL.

    Any other URL is returned unchanged. Nothing is fetched.

    Parameters
    ----------
    ipfs_url : str
        Candidate URL; the empty string is valid input.
    settings : ServerSettings, optional
        Source of the gateway template. Defaults to the process-wide snapshot.
    """
    if not is_ipfs_url(ipfs_url):
        return ipfs_url
    if settings is None:
        from badges_server.core.config import get_server_settings

        settings = get_server_settings()
    return settings.ipfs_gateway_template.replace(PATH_PLACEHOLDER, ipfs_url[len(IPFS_PREFIX):], 1)
