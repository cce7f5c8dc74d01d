from marketing_cms.models.policy_page import PolicyPage
from marketing_cms.models.site_content import SiteContent
from marketing_cms.utils.transaction import transactional

DEFAULT_CONTENT = {
    "home": {
        "hero_title": "Restaurant operations, unified",
        "hero_subtitle": "One platform for orders, kitchens and delivery.",
    },
    "about": {
        "hero_title": "About us",
        "hero_subtitle": "Technology built for modern restaurants.",
    },
    "integrations": {
        "hero_title": "Integrations",
        "hero_subtitle": (
            "Connect with your existing systems: POS, delivery "
            "platforms and business tools."
        ),
    },
}

DEFAULT_POLICIES = (
    {
        "slug": "privacy-policy",
        "title_en": "Privacy Policy",
        "meta_description": "How we collect, use, and protect your data.",
    },
    {
        "slug": "terms-and-conditions",
        "title_en": "Terms & Conditions",
        "meta_description": "Read our terms of service agreement.",
    },
    {
        "slug": "dpa",
        "title_en": "Data Processing Agreement",
        "meta_description": "Our commitment to data protection.",
    },
    {
        "slug": "service-level-agreement",
        "title_en": "Service Level Agreement",
        "meta_description": "Our uptime and support commitments.",
    },
    {
        "slug": "gdpr-eu",
        "title_en": "GDPR Compliance (EU)",
        "meta_description": "How we protect EU data subjects rights.",
    },
)


def seed_defaults(session):
    """
    Insert default content sections and policy pages that are not there yet.
    Existing rows are never overwritten. Returns (content_created, policies_created).
    """
    content_created = 0
    policies_created = 0

    with transactional(session):
        existing_pages = {row.page for row in session.query(SiteContent.page).all()}
        for page, content in DEFAULT_CONTENT.items():
            if page in existing_pages:
                continue
            session.add(SiteContent(page=page, content=dict(content)))
            content_created += 1

        existing_slugs = {row.slug for row in session.query(PolicyPage.slug).all()}
        for policy in DEFAULT_POLICIES:
            if policy["slug"] in existing_slugs:
                continue
            session.add(PolicyPage(
                slug=policy["slug"],
                title_en=policy["title_en"],
                content_en=f"<h1>{policy['title_en']}</h1>",
                meta_description=policy["meta_description"],
                status="published",
            ))
            policies_created += 1

    return content_created, policies_created
