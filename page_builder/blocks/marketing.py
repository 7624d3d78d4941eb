"""Marketing blocks — features, newsletter, FAQ, testimonials, CTA, stats, countdown, logos, social feed."""
from typing import List, Literal, Optional

from pydantic import Field

from .base import BlockContent


class FeatureItem(BlockContent):
    title: str = ""
    description: str = ""
    icon: str = "Star"


def _default_features() -> List[FeatureItem]:
    return [
        FeatureItem(title="Quality",  description="Best materials", icon="Star"),
        FeatureItem(title="Shipping", description="Fast delivery",  icon="Truck"),
        FeatureItem(title="Secure",   description="Safe payments",  icon="Shield"),
    ]


class FeaturesContent(BlockContent):
    items: List[FeatureItem] = Field(default_factory=_default_features)


class NewsletterContent(BlockContent):
    title: str = "Join Our Newsletter"
    description: str = "Subscribe to receive updates, access to exclusive deals, and more."
    button_text: str = "Subscribe"
    placeholder: str = "Enter your email"


class FAQItem(BlockContent):
    question: str
    answer: str


def _default_faq() -> List[FAQItem]:
    return [
        FAQItem(question="What is your return policy?", answer="You can return any item within 30 days of purchase."),
        FAQItem(question="How long does shipping take?", answer="Orders usually arrive within 3 to 5 business days."),
    ]


class FAQContent(BlockContent):
    title: Optional[str] = None
    subtitle: Optional[str] = None
    items: List[FAQItem] = Field(default_factory=_default_faq)


class Testimonial(BlockContent):
    name: str
    quote: str
    role: Optional[str] = None
    avatar: Optional[str] = None


def _default_testimonials() -> List[Testimonial]:
    return [
        Testimonial(name="Sarah Johnson", role="Fashion Blogger",
                    quote="The quality of their products is exceptional. I've been a loyal customer for years!"),
        Testimonial(name="Michael Chen", role="Photographer",
                    quote="Fast shipping and the clothes fit perfectly. Highly recommend to everyone."),
        Testimonial(name="Emily Davis", role="Designer",
                    quote="Love the unique designs and sustainable practices. My go-to brand for everyday wear."),
    ]


class TestimonialsContent(BlockContent):
    title: Optional[str] = None
    subtitle: Optional[str] = None
    items: List[Testimonial] = Field(default_factory=_default_testimonials)


class CTAContent(BlockContent):
    title: str = "Ready to get started?"
    description: Optional[str] = None
    button_text: str = "Get Started"
    button_link: Optional[str] = None
    variant: Literal["default", "dark", "gradient"] = "default"


class StatItem(BlockContent):
    value: float
    label: str
    prefix: str = ""
    suffix: str = ""
    icon: Optional[str] = None


def _default_stats() -> List[StatItem]:
    return [
        StatItem(value=10000, suffix="+", label="Happy Customers"),
        StatItem(value=500, suffix="+", label="Products"),
        StatItem(value=50, suffix="+", label="Countries"),
        StatItem(value=99, suffix="%", label="Satisfaction"),
    ]


class StatsContent(BlockContent):
    title: Optional[str] = None
    items: List[StatItem] = Field(default_factory=_default_stats)
    variant: Literal["default", "cards", "inline"] = "default"
    animate_numbers: bool = True


class CountdownContent(BlockContent):
    title: Optional[str] = None
    # ISO-8601; when absent the renderer counts down to one week from now
    target_date: Optional[str] = None
    show_days: bool = True
    show_hours: bool = True
    show_minutes: bool = True
    show_seconds: bool = True
    variant: Literal["default", "compact", "large"] = "default"


class LogoItem(BlockContent):
    url: str
    alt: str = ""
    link: Optional[str] = None


def _default_logos() -> List[LogoItem]:
    return [LogoItem(url=f"https://placehold.co/160x60?text=Logo+{i}", alt=f"Logo {i}") for i in range(1, 7)]


class LogoCarouselContent(BlockContent):
    title: Optional[str] = None
    logos: List[LogoItem] = Field(default_factory=_default_logos)
    speed: Literal["slow", "normal", "fast"] = "normal"
    grayscale: bool = True


class SocialImage(BlockContent):
    url: str
    link: Optional[str] = None


def _default_social_images() -> List[SocialImage]:
    return [SocialImage(url=f"https://placehold.co/400x400?text={i}") for i in range(1, 7)]


class SocialFeedContent(BlockContent):
    title: Optional[str] = None
    subtitle: Optional[str] = None
    images: List[SocialImage] = Field(default_factory=_default_social_images)
    columns: Literal[3, 4, 5, 6] = 6
    instagram_handle: str = "yourbrand"
    show_follow_button: bool = True
