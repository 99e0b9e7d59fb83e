from .seed_catalog_use_case import SeedCatalogResponse, SeedCatalogUseCase

__all__ = ["SeedCatalogUseCase", "SeedCatalogResponse"]
