# site_check/crawler/__init__.py
"""Crawl loop, smoke check and the URL/observer helpers they share."""
