"""Read-only marketing content served to the storefront."""

from datetime import datetime

from core.models.base import WireModel


class FAQ(WireModel):
    id: int
    question: str
    answer: str
    order: int
    active: bool


class ServiceArea(WireModel):
    id: int
    name: str
    slug: str
    description: str | None
    active: bool


class BlogPost(WireModel):
    id: int
    title: str
    slug: str
    excerpt: str
    content: str
    image: str | None
    author: str
    published_at: datetime
    featured: bool


class GalleryImage(WireModel):
    id: int
    title: str
    before_image: str
    after_image: str
    description: str | None
    featured: bool
    order: int
