"""Static company reputation table used to rate jobs from the search backend."""

from typing import Dict, Final

DEFAULT_COMPANY_RATING: Final[float] = 3.5

COMPANY_REPUTATION_MAP: Dict[str, float] = {
    # FAANG and top tech companies
    "Google": 5.0, "Apple": 5.0, "Meta": 5.0, "Amazon": 4.8, "Netflix": 4.9,
    "Microsoft": 4.9, "Tesla": 4.7, "SpaceX": 4.8, "OpenAI": 4.9, "Anthropic": 4.8,
    # Other major tech companies
    "Uber": 4.5, "Airbnb": 4.6, "Stripe": 4.7, "Spotify": 4.5, "Slack": 4.4,
    "Zoom": 4.3, "Dropbox": 4.4, "Twitter": 4.2, "LinkedIn": 4.6, "Salesforce": 4.3,
    # Established companies
    "IBM": 4.0, "Oracle": 3.9, "Intel": 4.1, "Cisco": 4.0, "Adobe": 4.2,
    "VMware": 4.0, "ServiceNow": 4.1, "Workday": 4.0, "Palantir": 4.3,
    # Financial tech
    "Goldman Sachs": 4.4, "JPMorgan": 4.2, "Morgan Stanley": 4.3, "Citadel": 4.6,
    "Two Sigma": 4.5, "Jane Street": 4.7, "DE Shaw": 4.6,
    # Consulting
    "McKinsey": 4.5, "BCG": 4.4, "Bain": 4.4, "Deloitte": 4.0, "Accenture": 3.8,
}


def get_company_rating(company: str) -> float:
    """Exact-name lookup; unknown companies get the default rating."""
    return COMPANY_REPUTATION_MAP.get(company, DEFAULT_COMPANY_RATING)
