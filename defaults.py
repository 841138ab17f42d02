"""Seed content for a fresh store: the studio's launch statistics, portfolio and settings."""

from schemas import (
    HeroSettings,
    PhotoItem,
    Review,
    SeoSettings,
    Service,
    SiteSettings,
    SocialLinks,
    Statistic,
    StoreState,
    VideoItem,
    YouTubeVideo,
    utcnow,
)

DEMO_EMBED = "https://www.youtube.com/embed/dQw4w9WgXcQ"
DEMO_WATCH = "https://www.youtube.com/watch?v=dQw4w9WgXcQ"


def _unsplash(photo: str, width: int = 800) -> str:
    return f"https://images.unsplash.com/photo-{photo}?w={width}&q=80"


def default_statistics():
    return [
        Statistic(id="1", icon="Trophy", label="Years of Experience", value=32, suffix="+", color="#FFB300", order=1),
        Statistic(id="2", icon="Heart", label="Happy Clients", value=1000, suffix="+", color="#EF5350", order=2),
        Statistic(id="3", icon="PartyPopper", label="Events Covered", value=5000, suffix="+", color="#4FC3F7", order=3),
        Statistic(id="4", icon="Globe", label="Cities Served", value=50, suffix="+", color="#66BB6A", order=4),
        Statistic(id="5", icon="Star", label="Client Satisfaction", value=100, suffix="%", color="#FFB300", order=5),
    ]


def default_portfolio():
    now = utcnow()
    return [
        VideoItem(
            id="p1", title="Sarah & Michael's Wedding", category=["Wedding"],
            thumbnail_url=_unsplash("1519741497674-611481863552"),
            description="A beautiful beach wedding ceremony", client_name="Sarah & Michael",
            location="Goa, India", date_taken="2024-02-15", featured=True,
            duration="4:32", video_source="youtube", youtube_url=DEMO_EMBED, created_at=now,
        ),
        PhotoItem(
            id="p2", title="Beachside Romance", category=["Pre-Wedding"],
            media_url=_unsplash("1522673607200-164d1b6ce486"),
            thumbnail_url=_unsplash("1522673607200-164d1b6ce486"),
            description="Pre-wedding shoot at sunset beach", client_name="Priya & Rahul",
            location="Kerala, India", date_taken="2024-01-20", featured=True, created_at=now,
        ),
        VideoItem(
            id="p3", title="Corporate Annual Meet", category=["Corporate"],
            thumbnail_url=_unsplash("1560472354-b33ff0c44a43"),
            description="Annual corporate event coverage", client_name="Tech Corp",
            location="Mumbai, India", date_taken="2024-03-10",
            duration="5:45", video_source="youtube", youtube_url=DEMO_EMBED, created_at=now,
        ),
        PhotoItem(
            id="p4", title="Maya's Birthday Bash", category=["Event"],
            media_url=_unsplash("1530103862676-de8c9debad1d"),
            thumbnail_url=_unsplash("1530103862676-de8c9debad1d"),
            description="Colorful birthday celebration", client_name="Maya",
            location="Chennai, India", date_taken="2024-02-28", created_at=now,
        ),
        VideoItem(
            id="p5", title="Garden Wedding Ceremony", category=["Wedding"],
            thumbnail_url=_unsplash("1606216794074-735e91aa2c92"),
            description="Elegant garden wedding", client_name="Anita & Vikram",
            location="Bangalore, India", date_taken="2024-01-15", featured=True,
            duration="6:12", video_source="youtube", youtube_url=DEMO_EMBED, created_at=now,
        ),
        PhotoItem(
            id="p6", title="Candid Love Story", category=["Candid"],
            media_url=_unsplash("1511285560929-80b456fea0bc"),
            thumbnail_url=_unsplash("1511285560929-80b456fea0bc"),
            description="Natural moments captured beautifully", client_name="Sneha & Arjun",
            location="Delhi, India", date_taken="2024-03-05", created_at=now,
        ),
    ]


def default_youtube_videos():
    now = utcnow()
    return [
        YouTubeVideo(
            id="yt1", youtube_id="dQw4w9WgXcQ", url=DEMO_WATCH, title="Royal Wedding Highlights 2024",
            thumbnail=_unsplash("1519741497674-611481863552"), description="Complete wedding highlights",
            category="Wedding", duration="8:45", order=1, created_at=now,
        ),
        YouTubeVideo(
            id="yt2", youtube_id="dQw4w9WgXcQ", url=DEMO_WATCH, title="Pre-Wedding in Mountains",
            thumbnail=_unsplash("1537633552985-df8429e8048b"), description="Romantic pre-wedding shoot",
            category="Pre-Wedding", duration="5:30", order=2, created_at=now,
        ),
        YouTubeVideo(
            id="yt3", youtube_id="dQw4w9WgXcQ", url=DEMO_WATCH, title="Corporate Event Coverage",
            thumbnail=_unsplash("1540575467063-178a50c2df87"), description="Professional event documentation",
            category="Corporate", duration="12:20", order=3, created_at=now,
        ),
    ]


def default_reviews():
    now = utcnow()
    return [
        Review(
            id="r1", client_name="Priya & Rahul", client_role="Wedding Clients",
            client_photo=_unsplash("1494790108377-be9c29b29330", 200), rating=5,
            review_text="CAMARA captured our wedding day so beautifully. Every photo tells a story, and the "
                        "video makes us cry happy tears every time we watch it. Absolutely magical!",
            event_type="Wedding", event_date="2024-02-15", featured=True, order=1, created_at=now,
        ),
        Review(
            id="r2", client_name="Ananya Sharma", client_role="Pre-Wedding Shoot",
            client_photo=_unsplash("1438761681033-6461ffad8d80", 200), rating=5,
            review_text="The pre-wedding shoot exceeded all our expectations. The team knew exactly how to make "
                        "us comfortable, and the photos are straight out of a fairytale!",
            event_type="Pre-Wedding", event_date="2024-01-20", featured=True, order=2, created_at=now,
        ),
        Review(
            id="r3", client_name="Vikram Industries", client_role="Corporate Client",
            client_photo=_unsplash("1472099645785-5658abf4ff4e", 200), rating=5,
            review_text="Professional, punctual, and incredibly talented. Our corporate event coverage was "
                        "outstanding. We've made them our official photography partner.",
            event_type="Corporate", event_date="2024-03-10", order=3, created_at=now,
        ),
        Review(
            id="r4", client_name="Maya & Arjun", client_role="Destination Wedding",
            client_photo=_unsplash("1507003211169-0a1dd7228f2d", 200), rating=5,
            review_text="Flying CAMARA to Goa for our beach wedding was the best decision. They captured the "
                        "sunset ceremony perfectly. Pure artistry!",
            event_type="Wedding", event_date="2024-01-10", order=4, created_at=now,
        ),
        Review(
            id="r5", client_name="Neha Kapoor", client_role="Birthday Celebration",
            client_photo=_unsplash("1534528741775-53994a69daeb", 200), rating=5,
            review_text="My daughter's first birthday was made even more special with CAMARA's candid "
                        "photography. They captured pure joy in every frame.",
            event_type="Event", event_date="2024-02-28", order=5, created_at=now,
        ),
    ]


def default_services():
    return [
        Service(
            id="s1", icon="Heart", title="Wedding Photography & Videography",
            description="Capture every magical moment of your special day with cinematic excellence and timeless elegance.",
            image=_unsplash("1519741497674-611481863552", 600), color="#EF5350", order=1,
        ),
        Service(
            id="s2", icon="Camera", title="Candid Photography & Videography",
            description="Natural, unposed moments that tell your authentic story with artistic vision.",
            image=_unsplash("1511285560929-80b456fea0bc", 600), color="#4FC3F7", order=2,
        ),
        Service(
            id="s3", icon="Users", title="Pre-Wedding Shoots",
            description="Romantic sessions in stunning locations to celebrate your love story before the big day.",
            image=_unsplash("1522673607200-164d1b6ce486", 600), color="#FFB300", order=3,
        ),
        Service(
            id="s4", icon="PartyPopper", title="Event Photography & Videography",
            description="From birthdays to anniversaries, we capture the energy and joy of every celebration.",
            image=_unsplash("1530103862676-de8c9debad1d", 600), color="#66BB6A", order=4,
        ),
        Service(
            id="s5", icon="Building2", title="Corporate Photography & Videography",
            description="Professional coverage for conferences, product launches, and corporate events.",
            image=_unsplash("1560472354-b33ff0c44a43", 600), color="#7E57C2", order=5,
        ),
    ]


def default_hero_settings():
    return HeroSettings(
        title="CAMARA",
        tagline=["Moments", "to", "Memories"],
        background_images=[
            _unsplash("1519741497674-611481863552", 1920),
            _unsplash("1606216794074-735e91aa2c92", 1920),
            _unsplash("1537633552985-df8429e8048b", 1920),
        ],
        animation_style="typewriter",
        animation_speed="medium",
    )


def default_site_settings():
    return SiteSettings(
        site_name="CAMARA",
        tagline="Moments to Memories",
        contact_email="hello@camara.studio",
        contact_phone="+91 98453 74999",
        whatsapp_number="+919845374999",
        address="123 Creative Studio Lane, Mumbai, Maharashtra 400001",
        social_links=SocialLinks(),
        seo=SeoSettings(
            meta_title="CAMARA Studio - Premium Photography & Videography",
            meta_description="Premium photography and videography studio capturing life's most precious "
                             "moments with artistic excellence since 1992.",
            meta_keywords="photography, videography, wedding photography, pre-wedding shoots, "
                          "candid photography, corporate events",
        ),
    )


def default_state() -> StoreState:
    return StoreState(
        statistics=default_statistics(),
        portfolio=default_portfolio(),
        youtube_videos=default_youtube_videos(),
        reviews=default_reviews(),
        services=default_services(),
        hero_settings=default_hero_settings(),
        site_settings=default_site_settings(),
    )
