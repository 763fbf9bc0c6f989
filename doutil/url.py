"""URL helpers."""

from urllib.parse import urlsplit, urlunsplit


def replace_ip(link: str, ip: str, new_ip: str) -> str:
    """Replace ip with new_ip in link's host, or anywhere if link has no host.

    Raises ValueError if link cannot be parsed.
    """
    parts = urlsplit(link)
    if not parts.netloc:
        return link.replace(ip, new_ip)
    userinfo, at, host = parts.netloc.rpartition("@")
    netloc = userinfo + at + host.replace(ip, new_ip)
    return urlunsplit(parts._replace(netloc=netloc))