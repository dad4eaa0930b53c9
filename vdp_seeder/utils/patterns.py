"""
Constants and regular expression patterns used during sitemap discovery.
"""

import re

# ============================================================
# SITE LIST
# ============================================================

# Only lines starting with a web scheme are treated as sites
SITE_URL_PATTERN = re.compile(r'^https?://')

# Separator between URL and label on an input line
LABEL_DELIMITER = '|'

# Label used when a line carries none
DEFAULT_LABEL = 'UNK'

# ============================================================
# SITEMAP CANDIDATES
# ============================================================

# Dealer Inspire inventory feed, checked first
PRIMARY_SITEMAP_PATH = '/dealer-inspire-inventory/inventory_sitemap.xml'

# Generic locations, in the order they are tried
FALLBACK_SITEMAP_PATHS = (
    '/sitemap.xml',
    '/sitemaps/inventory.xml',
    '/inventory-sitemap.xml',
    '/sitemap_index.xml',
)

ROBOTS_PATH = '/robots.txt'

# ============================================================
# FEED CONTENT
# ============================================================

# Root elements that mark a document as a sitemap
FEED_ROOT_TAGS = ('urlset', 'sitemapindex')

# Page location element
LOCATION_TAG = 'loc'

# Terms showing a generic sitemap actually lists inventory
INVENTORY_KEYWORDS = ('inventory', 'vehicle', 'vdp')

# ============================================================
# BLOCK DETECTION
# ============================================================

# Substrings in the homepage title that indicate a block page
BLOCK_TITLE_MARKERS = ('403', 'Forbidden')

# ============================================================
# DIAGNOSTICS
# ============================================================

# Characters of feed content shown in verbose previews
CONTENT_PREVIEW_CHARS = 200

# Sitemap references logged from a homepage
MAX_HOMEPAGE_SITEMAP_REFS = 3
