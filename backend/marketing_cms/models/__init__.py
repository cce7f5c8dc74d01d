from .user import User
from .blog_post import BlogPost
from .testimonial import Testimonial
from .integration import Integration
from .video_gallery import VideoGallery
from .team_member import TeamMember
from .policy_page import PolicyPage
from .lead import Lead
from .integration_request import IntegrationRequest
from .site_content import SiteContent
from .job_listing import JobListing
from .job_application import JobApplication

__all__ = [
    "User",
    "BlogPost",
    "Testimonial",
    "Integration",
    "VideoGallery",
    "TeamMember",
    "PolicyPage",
    "Lead",
    "IntegrationRequest",
    "SiteContent",
    "JobListing",
    "JobApplication",
]
