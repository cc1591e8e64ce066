from donamatch.services.catalog.service import CatalogService

__all__ = ["CatalogService"]
