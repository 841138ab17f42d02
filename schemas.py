"""
CAMARA Studio Content Schemas

Each Pydantic model below is one record type held by the content store. The
whole store is persisted as a single StoreState snapshot.

- Statistic      -> statistics
- PhotoItem      -> portfolio (type="photo")
- VideoItem      -> portfolio (type="video")
- YouTubeVideo   -> youtube_videos
- Review         -> reviews
- Service        -> services
- HeroSettings   -> hero_settings (singleton)
- SiteSettings   -> site_settings (singleton)
- AdminSession   -> admin (singleton)
"""

from datetime import datetime, timezone
from typing import Annotated, List, Literal, Optional, Union

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, TypeAdapter

CATEGORY_OPTIONS = ["Wedding", "Pre-Wedding", "Candid", "Event", "Corporate"]

Category = Literal["Wedding", "Pre-Wedding", "Candid", "Event", "Corporate"]
PublishStatus = Literal["published", "draft"]
VideoSource = Literal["uploaded", "youtube"]

DEFAULT_PHOTOGRAPHER = "CAMARA Team"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _as_utc(value: datetime) -> datetime:
    # Naive timestamps are taken to be UTC so every created_at compares
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


Timestamp = Annotated[datetime, AfterValidator(_as_utc)]


class Statistic(BaseModel):
    id: str
    icon: str = Field("Star", description="lucide icon name")
    label: str
    value: float = 0
    prefix: str = ""
    suffix: str = ""
    color: str = "#0288D1"
    order: int = 0
    enabled: bool = True


class _PortfolioBase(BaseModel):
    model_config = ConfigDict(extra="forbid")

    id: str
    title: str
    category: List[Category] = []
    media_url: str = ""
    thumbnail_url: str = ""
    description: str = ""
    client_name: str = ""
    location: str = ""
    date_taken: str = ""
    photographer: str = DEFAULT_PHOTOGRAPHER
    featured: bool = False
    status: PublishStatus = "published"
    created_at: Timestamp = Field(default_factory=utcnow)


class PhotoItem(_PortfolioBase):
    type: Literal["photo"] = "photo"


class VideoItem(_PortfolioBase):
    type: Literal["video"] = "video"
    duration: str = "0:00"
    video_source: VideoSource = "uploaded"
    youtube_url: Optional[str] = None


PortfolioItem = Annotated[Union[PhotoItem, VideoItem], Field(discriminator="type")]
portfolio_adapter = TypeAdapter(PortfolioItem)


class YouTubeVideo(BaseModel):
    id: str
    youtube_id: str = ""
    url: str
    title: str
    thumbnail: str = ""
    description: str = ""
    category: str = "Wedding"
    duration: str = ""
    order: int = 0
    enabled: bool = True
    created_at: Timestamp = Field(default_factory=utcnow)


class Review(BaseModel):
    id: str
    client_name: str
    client_role: str = ""
    client_photo: str = ""
    rating: int = Field(5, ge=1, le=5)
    review_text: str
    event_type: str = ""
    event_date: str = ""
    video_url: str = ""
    featured: bool = False
    status: PublishStatus = "published"
    order: int = 0
    created_at: Timestamp = Field(default_factory=utcnow)


class Service(BaseModel):
    id: str
    icon: str = "Camera"
    title: str
    description: str = ""
    image: str = ""
    color: str = "#0288D1"
    order: int = 0
    enabled: bool = True


class HeroSettings(BaseModel):
    title: str = "CAMARA"
    tagline: List[str] = ["Moments", "to", "Memories"]
    background_images: List[str] = []
    animation_style: str = "typewriter"
    animation_speed: str = "medium"


class SocialLinks(BaseModel):
    instagram: str = "#"
    facebook: str = "#"
    youtube: str = "#"
    twitter: str = "#"


class SeoSettings(BaseModel):
    meta_title: str = ""
    meta_description: str = ""
    meta_keywords: str = ""
    og_image: str = ""


class SiteSettings(BaseModel):
    site_name: str = "CAMARA"
    tagline: str = "Moments to Memories"
    logo_url: str = ""
    contact_email: str = ""
    contact_phone: str = ""
    whatsapp_number: str = ""
    address: str = ""
    social_links: SocialLinks = Field(default_factory=SocialLinks)
    seo: SeoSettings = Field(default_factory=SeoSettings)


class AdminUser(BaseModel):
    email: str
    name: str


class AdminSession(BaseModel):
    is_authenticated: bool = False
    admin_user: Optional[AdminUser] = None


class StoreState(BaseModel):
    statistics: List[Statistic] = []
    portfolio: List[PortfolioItem] = []
    youtube_videos: List[YouTubeVideo] = []
    reviews: List[Review] = []
    services: List[Service] = []
    hero_settings: HeroSettings = Field(default_factory=HeroSettings)
    site_settings: SiteSettings = Field(default_factory=SiteSettings)
    admin: AdminSession = Field(default_factory=AdminSession)
