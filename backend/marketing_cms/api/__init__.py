from flask import Blueprint

api_bp = Blueprint("api", __name__)

# Import route modules so their blueprints can be nested under api_bp
from .health import health_bp
from .auth import auth_bp
from . import setup_admin  # noqa: F401  adds /auth/create-admin
from .blog import blog_bp
from .testimonials import testimonials_bp
from .integrations import integrations_bp
from .video_galleries import videos_bp
from .team import team_bp
from .policies import policies_bp
from .leads import leads_bp
from .integration_requests import integration_requests_bp
from .content import content_bp
from .careers import careers_bp
from .sitemap import sitemap_bp

api_bp.register_blueprint(health_bp)
api_bp.register_blueprint(auth_bp, url_prefix="/auth")
api_bp.register_blueprint(blog_bp, url_prefix="/blog")
api_bp.register_blueprint(testimonials_bp, url_prefix="/testimonials")
api_bp.register_blueprint(integrations_bp, url_prefix="/integrations")
api_bp.register_blueprint(videos_bp, url_prefix="/video-galleries")
api_bp.register_blueprint(team_bp, url_prefix="/team")
api_bp.register_blueprint(policies_bp, url_prefix="/policies")
api_bp.register_blueprint(leads_bp, url_prefix="/leads")
api_bp.register_blueprint(integration_requests_bp, url_prefix="/integration-requests")
api_bp.register_blueprint(content_bp, url_prefix="/content")
api_bp.register_blueprint(careers_bp, url_prefix="/careers")
api_bp.register_blueprint(sitemap_bp)
