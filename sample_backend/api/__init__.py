"""HTTP layer: application factory and resource routers."""
