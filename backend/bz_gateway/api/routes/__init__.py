"""API Routes — one router per storefront resource, all under /api."""
