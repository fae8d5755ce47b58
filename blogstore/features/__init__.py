"""Repository features package"""

from blogstore.features.base_feature import RepositoryFeature
from blogstore.features.publication_feature import PublicationFeature
from blogstore.features.slug_feature import SlugFeature

__all__ = ["RepositoryFeature", "PublicationFeature", "SlugFeature"]
