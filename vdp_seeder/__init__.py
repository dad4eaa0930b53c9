"""
VDP Seeder
Finds one vehicle detail page URL per dealer site from its inventory sitemap.
"""

__version__ = '1.0.0'
