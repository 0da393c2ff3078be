"""
Read-only marketing content: FAQs, service areas, blog posts, gallery.

Content is loaded by migrations/seed; the storefront only reads it.
"""

import logging

from clients.postgres_client import PostgresClient
from core.models import FAQ, BlogPost, GalleryImage, ServiceArea

logger = logging.getLogger(__name__)


class ContentService:
    """Service for storefront content reads."""

    def __init__(self, postgres: PostgresClient):
        self.postgres = postgres

    def list_faqs(self) -> list[FAQ]:
        rows = self.postgres.execute(
            'SELECT * FROM faqs WHERE active = true ORDER BY "order" ASC, id ASC'
        )
        return [FAQ.model_validate(row) for row in rows]

    def list_service_areas(self) -> list[ServiceArea]:
        rows = self.postgres.execute(
            "SELECT * FROM service_areas WHERE active = true ORDER BY name ASC"
        )
        return [ServiceArea.model_validate(row) for row in rows]

    def list_blog_posts(self) -> list[BlogPost]:
        """All posts, newest first."""
        rows = self.postgres.execute(
            "SELECT * FROM blog_posts ORDER BY published_at DESC"
        )
        return [BlogPost.model_validate(row) for row in rows]

    def list_featured_blog_posts(self) -> list[BlogPost]:
        rows = self.postgres.execute(
            "SELECT * FROM blog_posts WHERE featured = true ORDER BY published_at DESC"
        )
        return [BlogPost.model_validate(row) for row in rows]

    def get_blog_post(self, slug: str) -> BlogPost | None:
        row = self.postgres.execute_single(
            "SELECT * FROM blog_posts WHERE slug = %s",
            (slug,)
        )

        if row is None:
            return None

        return BlogPost.model_validate(row)

    def list_gallery(self) -> list[GalleryImage]:
        rows = self.postgres.execute(
            'SELECT * FROM gallery_images ORDER BY "order" ASC, id ASC'
        )
        return [GalleryImage.model_validate(row) for row in rows]

    def list_featured_gallery(self) -> list[GalleryImage]:
        rows = self.postgres.execute(
            'SELECT * FROM gallery_images WHERE featured = true ORDER BY "order" ASC, id ASC'
        )
        return [GalleryImage.model_validate(row) for row in rows]
