"""Storefront application — persistence, HTML pages, admin API, courier proxy."""
