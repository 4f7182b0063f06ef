"""Infrastructure: shared cache stores, remote gateway, tenant registry."""
