"""Listing service collaborators for the navigator."""

from projectbrowser.listing.client import HttpListingService
from projectbrowser.listing.service import FileOpener, ListingService

__all__ = [
    "FileOpener",
    "HttpListingService",
    "ListingService",
]
