"""Keyword-based enrichment used when the AI provider is unavailable.

Everything here is pure and deterministic: the same text and URL always
produce the same summary, and no input can make extraction fail.
"""

from urllib.parse import urlparse

from enrichment_api.models import StructuredSummary

MAX_KEYWORDS = 10
MAX_SIGNALS = 4

BUSINESS_TERMS = [
    "products",
    "services",
    "solutions",
    "platform",
    "technology",
    "innovation",
    "customer",
    "business",
    "data",
    "cloud",
]

# (trigger terms, signal), checked in order
SIGNAL_RULES: list[tuple[tuple[str, ...], str]] = [
    (("funding", "raised", "investment"), "Recently announced funding round"),
    (("growth", "expansion"), "Strong growth trajectory indicated"),
    (("customer", "clients"), "Active customer engagement"),
    (("hire", "hiring", "team"), "Expanding team"),
]

DEFAULT_SIGNALS = ["Established online presence", "Active business operations"]


def domain_from_url(website_url: str) -> str:
    """Return the host of ``website_url`` without a leading ``www.``.

    URLs without a scheme (``acme.com/about``) are handled by taking the part
    before the first slash.
    """
    try:
        host = urlparse(website_url.strip()).hostname
    except ValueError:
        host = None
    if not host:
        host = website_url.strip().split("://")[-1].split("/")[0].split(":")[0]
    host = host.lower()
    if host.startswith("www."):
        host = host[4:]
    return host or website_url


class HeuristicExtractor:
    """Derives a StructuredSummary from website text without any model."""

    def extract(self, website_text: str, website_url: str) -> StructuredSummary:
        domain = domain_from_url(website_url)
        text_lower = website_text.lower()

        return StructuredSummary(
            summary=(
                f"{domain} is a company focused on providing innovative solutions "
                "in their industry. Based on their website content, they emphasize "
                "customer value and technological innovation."
            ),
            what_they_do=[
                f"Delivers products/services through their platform at {website_url}",
                "Focuses on user experience and customer satisfaction",
                "Leverages modern technology and best practices",
                "Serves a growing market with scalable solutions",
            ],
            keywords=self.extract_keywords(text_lower, domain),
            signals=self.generate_signals(text_lower),
        )

    def extract_keywords(self, text: str, domain: str) -> list[str]:
        """Domain first, then every business term found in ``text``."""
        text_lower = text.lower()
        keywords = [domain]
        keywords.extend(term for term in BUSINESS_TERMS if term in text_lower)
        return keywords[:MAX_KEYWORDS]

    def generate_signals(self, text: str) -> list[str]:
        """One signal per matching rule group, or the defaults when none match."""
        text_lower = text.lower()
        signals = [
            signal
            for terms, signal in SIGNAL_RULES
            if any(term in text_lower for term in terms)
        ]
        if not signals:
            signals = list(DEFAULT_SIGNALS)
        return signals[:MAX_SIGNALS]
