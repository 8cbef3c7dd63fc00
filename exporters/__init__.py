"""Exporters for turning object graphs into linked HTML sites."""

from .html_exporter import render_detail_page, render_listing, render_root_index
from .site_exporter import SiteReport, write_site

__all__ = ["render_detail_page", "render_listing", "render_root_index", "SiteReport", "write_site"]
