"""
GetMeds - medicine availability aggregator for Bulgarian pharmacies

Modules:
    models         - Data models (CanonicalResult, RetailerConfig, ScrapedProductRef)
    common         - Shared utilities (config loader, logging, errors, text utils)
    normalization  - Availability classification, price formatting, ordering
    transport      - Async relay client and settle-all fan-out
    retailers      - Per-retailer adapters (Sopharmacy, VMClub, JSON endpoints)
    demo           - Synthetic results for offline operation
    search         - Aggregator and search session state
    relay          - CORS relay server with host allow-list
"""
