from datetime import datetime, timezone
from html import escape as xml_escape

from flask import Blueprint, current_app, url_for
from sqlalchemy.exc import SQLAlchemyError

from marketing_cms.extensions import db
from marketing_cms.models.blog_post import BlogPost
from marketing_cms.models.integration import Integration
from marketing_cms.models.job_listing import JobListing

sitemap_bp = Blueprint("sitemap", __name__)

# path, changefreq, priority
STATIC_ROUTES = (
    ("/", "daily", "1.0"),
    ("/about", "monthly", "0.8"),
    ("/contact", "monthly", "0.8"),
    ("/connect", "monthly", "0.8"),
    ("/faqs", "monthly", "0.7"),
    ("/integrations", "weekly", "0.8"),
    ("/video-showcase", "monthly", "0.6"),
    ("/careers", "weekly", "0.7"),
    ("/solutions/g-online", "monthly", "0.9"),
    ("/solutions/g-online-lite", "monthly", "0.9"),
    ("/solutions/g-kds", "monthly", "0.9"),
    ("/solutions/g-dispatch", "monthly", "0.9"),
    ("/solutions/g-data", "monthly", "0.9"),
    ("/persona/smbs", "monthly", "0.8"),
    ("/persona/regional-chains", "monthly", "0.8"),
    ("/persona/global-chains", "monthly", "0.8"),
    ("/persona/dark-kitchens", "monthly", "0.8"),
    ("/gcc", "monthly", "0.7"),
    ("/mea", "monthly", "0.7"),
    ("/sea", "monthly", "0.7"),
    ("/legal/privacy", "yearly", "0.5"),
    ("/legal/terms", "yearly", "0.5"),
    ("/legal/dpa", "yearly", "0.5"),
    ("/legal/sla", "yearly", "0.5"),
    ("/legal/gdpr", "yearly", "0.5"),
    ("/legal/cookie-settings", "yearly", "0.4"),
    ("/blog", "daily", "0.8"),
)

CACHE_SECONDS = 3600


def public_url(path):
    base_url = current_app.config.get("BASE_URL", "").rstrip("/")
    return f"{base_url}{path}"


def format_lastmod(value):
    if not value:
        value = datetime.now(timezone.utc)
    return value.strftime("%Y-%m-%d")


def build_sitemap_entry(path, lastmod=None, changefreq="weekly", priority="0.6"):
    lines = [
        "  <url>",
        f"    <loc>{xml_escape(public_url(path))}</loc>",
        f"    <lastmod>{format_lastmod(lastmod)}</lastmod>",
    ]
    if changefreq:
        lines.append(f"    <changefreq>{changefreq}</changefreq>")
    if priority:
        lines.append(f"    <priority>{priority}</priority>")
    lines.append("  </url>")
    return "\n".join(lines)


def _blog_entries():
    posts = (
        BlogPost.query
        .filter_by(status="published")
        .order_by(BlogPost.updated_at.desc(), BlogPost.id.desc())
        .all()
    )
    return [
        build_sitemap_entry(
            f"/blog/{post.slug}",
            lastmod=post.updated_at or post.created_at,
            changefreq="monthly",
            priority="0.7",
        )
        for post in posts
    ]


def _integration_entries():
    integrations = (
        Integration.query
        .filter_by(status="active")
        .order_by(Integration.display_order.asc(), Integration.id.asc())
        .all()
    )
    return [
        build_sitemap_entry(
            f"/integrations#{integration.id}",
            lastmod=integration.updated_at or integration.created_at,
            changefreq="monthly",
            priority="0.6",
        )
        for integration in integrations
    ]


def _career_entries():
    listings = (
        JobListing.query
        .filter_by(status="active")
        .order_by(JobListing.created_at.desc(), JobListing.id.desc())
        .all()
    )
    return [
        build_sitemap_entry(
            f"/careers#{listing.id}",
            lastmod=listing.updated_at or listing.created_at,
            changefreq="weekly",
            priority="0.6",
        )
        for listing in listings
    ]


def collect_entries():
    entries = [
        build_sitemap_entry(path, changefreq=changefreq, priority=priority)
        for path, changefreq, priority in STATIC_ROUTES
    ]

    # Each dynamic source is optional; a failing one is logged and skipped
    sources = (
        ("blog posts", _blog_entries),
        ("integrations", _integration_entries),
        ("job listings", _career_entries),
    )
    for name, source in sources:
        try:
            entries.extend(source())
        except SQLAlchemyError:
            db.session.rollback()
            current_app.logger.exception("Failed to load %s for sitemap", name)

    return entries


@sitemap_bp.route("/sitemap.xml", methods=["GET"])
def sitemap_xml():
    xml_body = "\n".join([
        '<?xml version="1.0" encoding="UTF-8"?>',
        '<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">',
        *collect_entries(),
        "</urlset>",
    ])
    response = current_app.response_class(xml_body, mimetype="application/xml")
    response.headers["Cache-Control"] = f"public, max-age={CACHE_SECONDS}"
    return response


@sitemap_bp.route("/robots.txt", methods=["GET"])
def robots_txt():
    body = "\n".join([
        "User-agent: *",
        "Allow: /",
        "Disallow: /admin/",
        "Disallow: /api/",
        "",
        f"Sitemap: {public_url(url_for('api.sitemap.sitemap_xml'))}",
        "",
    ])
    response = current_app.response_class(body, mimetype="text/plain")
    response.headers["Cache-Control"] = f"public, max-age={CACHE_SECONDS}"
    return response
