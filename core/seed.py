"""
First-run defaults for an empty storefront database.

Seeding runs once: if any site setting exists the database is considered
initialized and nothing is written. Admin-editable resources go through their
services so the audit log records them (attributed to no admin).
"""

import logging
from datetime import timedelta

from core.models import (
    ColorThemeCreate, ImageAssetCreate, ServicePricingCreate, SiteSettingCreate,
)
from utils.timezone import now_utc

logger = logging.getLogger(__name__)


DEFAULT_SITE_SETTINGS = [
    ("site_title", "Eco Clean Power Washing", "general"),
    ("site_description", "Professional Power Washing Services in Harrisburg & Mechanicsburg", "general"),
    ("phone_number", "(479) 399-8717", "contact"),
    ("email", "perfectpreasure@gmail.com", "contact"),
    ("address", "Harrisburg, PA", "contact"),
    ("service_area", "Harrisburg, Mechanicsburg, Camp Hill, Carlisle & Surrounding Areas", "general"),
    ("hero_title", "Professional Power Washing Services", "homepage"),
    ("hero_subtitle", "Transform your property with our eco-friendly cleaning solutions", "homepage"),
    ("cta_button_text", "Get Free Quote", "homepage"),
    ("about_title", "Why Choose Eco Clean?", "homepage"),
    (
        "about_description",
        "We provide professional, reliable, and eco-friendly power washing services "
        "that restore your property's beauty while protecting the environment.",
        "homepage",
    ),
]

# (service_key, name, base_price, description, requires_stories)
DEFAULT_SERVICE_PRICING = [
    ("house-washing", "House Washing", 200, "Complete exterior house cleaning", True),
    ("driveway-cleaning", "Driveway Cleaning", 150, "Concrete and asphalt driveway cleaning", False),
    ("deck-cleaning", "Deck Cleaning", 175, "Wood and composite deck restoration", False),
    ("roof-cleaning", "Roof Cleaning", 250, "Safe roof cleaning and moss removal", True),
    ("commercial-cleaning", "Commercial Cleaning", 300, "Professional commercial property cleaning", True),
    ("gutter-cleaning", "Gutter Cleaning", 125, "Complete gutter cleaning and maintenance", True),
    ("fence-cleaning", "Fence Cleaning", 100, "Fence washing and restoration", False),
    ("patio-cleaning", "Patio Cleaning", 125, "Patio and outdoor living space cleaning", False),
]

DEFAULT_IMAGE_ASSETS = [
    ("hero_background", "/api/placeholder/1920/1080", "Professional power washing service", "homepage"),
    ("about_image", "/api/placeholder/600/400", "Power washing equipment", "homepage"),
    ("service_house", "/api/placeholder/400/300", "House washing service", "services"),
    ("service_driveway", "/api/placeholder/400/300", "Driveway cleaning service", "services"),
    ("service_deck", "/api/placeholder/400/300", "Deck cleaning service", "services"),
    ("logo", "/api/placeholder/200/100", "Eco Clean Power Washing Logo", "branding"),
]

DEFAULT_COLOR_THEMES = [
    ("primary", "#2563eb", "brand", "Primary brand color"),
    ("secondary", "#059669", "brand", "Secondary brand color"),
    ("accent", "#dc2626", "brand", "Accent color for highlights"),
    ("background", "#ffffff", "layout", "Main background color"),
    ("text_primary", "#1f2937", "layout", "Primary text color"),
    ("text_secondary", "#6b7280", "layout", "Secondary text color"),
    ("button_primary", "#2563eb", "interactive", "Primary button color"),
    ("button_hover", "#1d4ed8", "interactive", "Button hover color"),
]

DEFAULT_FAQS = [
    ("Is Soft Washing Safe For Plants?",
     "Yes, we use eco-friendly cleaning solutions that are safe for your plants and landscaping."),
    ("How Often Should I Have My House Washed?",
     "We recommend annual house washing to maintain your home's appearance and prevent damage from mold and mildew."),
    ("Do You Offer Free Estimates?",
     "Yes, we provide free, no-obligation estimates for all our services."),
    ("What's Included in Your House Washing Service?",
     "Our house washing service includes exterior walls, windows, gutters, and trim cleaning."),
    ("Are You Licensed and Insured?",
     "Yes, we are fully licensed and insured for your peace of mind."),
]

# (title, slug, excerpt, content, featured)
DEFAULT_BLOG_POSTS = [
    (
        "Power Washing a Wooden Fence: A Complete Guide",
        "power-washing-wooden-fence-guide",
        "Learn the best techniques for safely power washing your wooden fence without causing damage.",
        "Power washing a wooden fence requires careful technique and the right equipment.",
        True,
    ),
    (
        "Spring Cleaning: Why Your Driveway Needs Professional Attention",
        "spring-driveway-cleaning-guide",
        "Discover why professional driveway cleaning is essential for maintaining your property's curb appeal.",
        "After a long winter, your driveway has likely accumulated dirt, stains, and debris.",
        True,
    ),
    (
        "The Benefits of Regular House Washing",
        "benefits-regular-house-washing",
        "Regular house washing isn't just about appearance, it's about protecting your investment.",
        "Many homeowners underestimate the importance of regular house washing.",
        False,
    ),
]

DEFAULT_GALLERY = [
    ("House Washing Before & After", "Complete house exterior transformation"),
    ("Driveway Restoration", "Concrete driveway deep cleaning"),
    ("Deck Cleaning Project", "Wood deck restoration and staining"),
]

# (name, zip code)
DEFAULT_SERVICE_AREAS = [
    ("Harrisburg", "17101"),
    ("Mechanicsburg", "17055"),
    ("Camp Hill", "17011"),
    ("Carlisle", "17013"),
]


def seed_defaults(postgres, services) -> bool:
    """
    Populate an empty database.

    Args:
        postgres: PostgresClient
        services: Service dict from app.build_services

    Returns:
        True if defaults were written, False if the database was already seeded
    """
    if services["site_setting"].list_all():
        logger.debug("Site settings present, skipping seed")
        return False

    for key, value, category in DEFAULT_SITE_SETTINGS:
        services["site_setting"].create(SiteSettingCreate(key=key, value=value, category=category))

    for service_key, name, base_price, description, requires_stories in DEFAULT_SERVICE_PRICING:
        services["service_pricing"].create(ServicePricingCreate(
            service_key=service_key,
            name=name,
            base_price=base_price,
            description=description,
            requires_stories=requires_stories,
        ))

    for key, url, alt_text, category in DEFAULT_IMAGE_ASSETS:
        services["image_asset"].create(ImageAssetCreate(
            key=key, url=url, alt_text=alt_text, category=category,
        ))

    for key, value, category, description in DEFAULT_COLOR_THEMES:
        services["color_theme"].create(ColorThemeCreate(
            key=key, value=value, category=category, description=description,
        ))

    _seed_content(postgres)

    logger.info("Seeded default storefront data")
    return True


def _seed_content(postgres) -> None:
    postgres.execute_many(
        'INSERT INTO faqs (question, answer, "order", active) VALUES (%s, %s, %s, true)',
        [(question, answer, order) for order, (question, answer) in enumerate(DEFAULT_FAQS)]
    )

    published = now_utc()
    postgres.execute_many(
        """
        INSERT INTO blog_posts (title, slug, excerpt, content, image, author, published_at, featured)
        VALUES (%s, %s, %s, %s, NULL, %s, %s, %s)
        """,
        [
            (title, slug, excerpt, content, "Eco Clean Team",
             published - timedelta(days=offset), featured)
            for offset, (title, slug, excerpt, content, featured) in enumerate(DEFAULT_BLOG_POSTS)
        ]
    )

    postgres.execute_many(
        """
        INSERT INTO gallery_images (title, before_image, after_image, description, featured, "order")
        VALUES (%s, %s, %s, %s, true, %s)
        """,
        [
            (title, "/api/placeholder/400/300", "/api/placeholder/400/300", description, order)
            for order, (title, description) in enumerate(DEFAULT_GALLERY)
        ]
    )

    postgres.execute_many(
        "INSERT INTO service_areas (name, slug, description, active) VALUES (%s, %s, %s, true)",
        [
            (name, name.lower().replace(" ", "-"), f"{name}, PA {zip_code}")
            for name, zip_code in DEFAULT_SERVICE_AREAS
        ]
    )
