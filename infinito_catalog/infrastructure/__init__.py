"""Infrastructure adapters: configuration, caching, logging and storefront client."""
