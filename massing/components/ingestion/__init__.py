from massing.components.ingestion.imported_site import ImportedSite
from massing.components.ingestion.site_importer import SiteImporter

__all__ = ["ImportedSite", "SiteImporter"]
