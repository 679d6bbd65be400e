from .serpapi import GoogleNewsFeed, YouTubeFeed, SerpApiFeed
from .base import BaseFeed

__all__ = ["GoogleNewsFeed", "YouTubeFeed", "SerpApiFeed", "BaseFeed"]
