"""URL discovery for sites."""

from sitemd.discovery.orchestrator import DiscoveryOrchestrator
from sitemd.discovery.robots import RobotsResolver, parse_robots_txt
from sitemd.discovery.sitemap import SitemapIndexer, parse_sitemap

__all__ = [
    "DiscoveryOrchestrator",
    "RobotsResolver",
    "SitemapIndexer",
    "parse_robots_txt",
    "parse_sitemap",
]
