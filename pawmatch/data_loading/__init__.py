"""Data loading module for the animal catalog and adopter profiles."""

from .loaders import load_catalog, load_user_profile, catalog_to_frame

__all__ = ["load_catalog", "load_user_profile", "catalog_to_frame"]
