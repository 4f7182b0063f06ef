"""Application layer: cache engine, loader, tenant resolution, import."""
