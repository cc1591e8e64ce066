from donamatch.services.donations.service import DonationService

__all__ = ["DonationService"]
