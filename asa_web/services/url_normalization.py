import re
from dataclasses import dataclass, field
from urllib.parse import urlsplit


class UrlNormalizer:
    """Strategy interface."""
    def normalize(self, s: str) -> str:
        raise NotImplementedError


@dataclass(frozen=True)
class AppStoreUrlNormalizer(UrlNormalizer):
    """
    Trims the input, adds the default scheme when missing and rejects anything that is
    not a plain http(s) URL. Raises ValueError with a message fit for the page.
    """
    default_scheme: str = "https"
    allowed_hosts: frozenset = field(default_factory=frozenset)

    def normalize(self, s: str) -> str:
        s = (s or "").strip()
        if not s:
            raise ValueError("Please enter an app store URL.")

        if re.match(r"^[a-z][a-z0-9+.-]*://", s, flags=re.IGNORECASE):
            if not re.match(r"^https?://", s, flags=re.IGNORECASE):
                raise ValueError("Only http and https links are supported.")
        else:
            s = f"{self.default_scheme}://" + s

        host = (urlsplit(s).hostname or "").lower()
        if "." not in host:
            raise ValueError(f"Not a valid URL: {s}")

        allowed = {h.lower() for h in self.allowed_hosts}
        if allowed and host not in allowed:
            raise ValueError(f"Unsupported store host {host!r}. Expected one of: {', '.join(sorted(allowed))}.")

        return s
