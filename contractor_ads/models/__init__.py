from contractor_ads.models.ad import Ad
from contractor_ads.models.lead import Lead

__all__ = ["Ad", "Lead"]
