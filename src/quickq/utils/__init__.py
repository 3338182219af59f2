from .reputation import COMPANY_REPUTATION_MAP, DEFAULT_COMPANY_RATING, get_company_rating

__all__ = ["COMPANY_REPUTATION_MAP", "DEFAULT_COMPANY_RATING", "get_company_rating"]
