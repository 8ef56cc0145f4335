"""Social network profile URLs."""

SOCIAL_BASE_URLS: dict[str, str] = {
    "LinkedIn": "https://linkedin.com/in/",
    "GitHub": "https://github.com/",
    "Twitter": "https://twitter.com/",
    "ORCID": "https://orcid.org/",
    "GitLab": "https://gitlab.com/",
    "Stack Overflow": "https://stackoverflow.com/users/",
    "YouTube": "https://youtube.com/@",
    "Instagram": "https://instagram.com/",
    "Facebook": "https://facebook.com/",
    "Medium": "https://medium.com/@",
    "Dev.to": "https://dev.to/",
    "Hashnode": "https://hashnode.com/@",
}

DEFAULT_URL_PATTERN = "https://{network}.com/{username}"


def social_network_url(network: str, username: str) -> str:
    """Profile URL for a network, falling back to https://{network}.com/{username}."""
    base = SOCIAL_BASE_URLS.get(network)
    if base:
        return f"{base}{username}"
    return DEFAULT_URL_PATTERN.format(network=network.lower(), username=username)
