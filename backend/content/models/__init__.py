from .base import ContentStatus
from .blogs import Blog, BlogTranslation
from .faqs import FAQ, FAQTranslation
from .lookups import City, Country, GradeLevel, ProgramType
from .pages import HeroPage, HeroPageTranslation, HeroPageType, PartnerLogo, PartnerLogoTranslation
from .programs import Program, ProgramTranslation
from .submissions import ContactSubmission, NewsletterSubscription, ProgramApplication
from .testimonials import Testimonial, TestimonialTranslation
from .users import User, UserRole
from .videos import Video, VideoTranslation

__all__ = [
    "Blog",
    "BlogTranslation",
    "City",
    "ContactSubmission",
    "ContentStatus",
    "Country",
    "FAQ",
    "FAQTranslation",
    "GradeLevel",
    "HeroPage",
    "HeroPageTranslation",
    "HeroPageType",
    "NewsletterSubscription",
    "PartnerLogo",
    "PartnerLogoTranslation",
    "Program",
    "ProgramApplication",
    "ProgramTranslation",
    "ProgramType",
    "Testimonial",
    "TestimonialTranslation",
    "User",
    "UserRole",
    "Video",
    "VideoTranslation",
]
