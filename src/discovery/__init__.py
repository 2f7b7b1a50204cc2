"""
Product link discovery.

Modules:
    link_harvester - LinkHarvester for the paginated back-office listing
    link_store     - CSV persistence of harvested links
"""

from .link_harvester import LinkHarvester, ListingUnreachableError, build_page_url
from .link_store import load_links, save_links

__all__ = [
    'LinkHarvester',
    'ListingUnreachableError',
    'build_page_url',
    'load_links',
    'save_links',
]
