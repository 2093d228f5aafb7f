"""
Static placeholder news, the terminal fallback of the fetch pipeline.
"""
from __future__ import annotations

from datetime import datetime, timedelta
from typing import List, Optional

from civicfeed.models import Article, Category, Priority
from civicfeed.utils import now_utc

PLACEHOLDER_LOCATION = "Delhi"

_IMAGE = "https://images.unsplash.com/photo-{}?w=400&h=250&fit=crop"

# (minutes ago, headline, summary, image id, source, category, priority, read time)
_PLACEHOLDER_ROWS = [
    (
        10,
        "Emergency: Gas Leak Reported in Karol Bagh",
        "Immediate evacuation of 3 residential blocks. Fire department and gas authority teams on site.",
        "1544620347-c4fd4a3d5957",
        "Delhi Fire Service",
        Category.EMERGENCY,
        Priority.URGENT,
        1,
    ),
    (
        15,
        "Traffic Jam Alert: Outer Ring Road Blocked",
        "Major accident near Punjabi Bagh causing 2-hour delays. Use alternate routes via Rohtak Road.",
        "1581889470536-467bdbe30cd0",
        "Delhi Traffic Police",
        Category.TRAFFIC,
        Priority.URGENT,
        2,
    ),
    (
        25,
        "Heavy Rain Alert: Water logging Expected",
        "Weather department warns of heavy rainfall in Delhi-NCR today, {today}. "
        "Citizens advised to avoid unnecessary travel.",
        "1519904981063-b0cf448d479e",
        "IMD Delhi",
        Category.WEATHER,
        Priority.HIGH,
        2,
    ),
    (
        35,
        "Metro Blue Line Partially Disrupted",
        "Technical snag at Rajouri Garden station. Services between Kirti Nagar and Ramesh Nagar suspended.",
        "1544620347-c4fd4a3d5957",
        "Delhi Metro Rail Corporation",
        Category.TRANSPORTATION,
        Priority.HIGH,
        1,
    ),
    (
        45,
        "New Air Pollution Control Measures Announced",
        "Delhi government introduces stricter emission norms for commercial vehicles. "
        "Implementation starts next month.",
        "1611273426858-450d8e3c9fce",
        "Delhi Pollution Control Board",
        Category.ENVIRONMENT,
        Priority.MEDIUM,
        3,
    ),
    (
        60,
        "Public Wi-Fi Expansion in Parks",
        "Free Wi-Fi services now available in 25 additional public parks across Delhi. "
        "Part of Digital India initiative.",
        "1581091226825-a6a2a5aee158",
        "Delhi Development Authority",
        Category.TECHNOLOGY,
        Priority.LOW,
        2,
    ),
    (
        90,
        "Water Supply Disruption in South Delhi",
        "Planned maintenance work will affect water supply in Greater Kailash, Defence Colony areas "
        "from 10 PM to 6 AM.",
        "1584464491033-06628f3a6b7b",
        "Delhi Jal Board",
        Category.UTILITIES,
        Priority.MEDIUM,
        2,
    ),
    (
        120,
        "New Healthcare Center Opens in Dwarka",
        "State-of-the-art 200-bed facility with emergency services. Expected to serve 50,000 residents in the area.",
        "1576091160399-112ba8d25d1f",
        "Delhi Health Department",
        Category.HEALTH,
        Priority.MEDIUM,
        3,
    ),
    (
        150,
        "Student Safety Initiative in Schools",
        "Delhi Education Department launches comprehensive safety protocols. "
        "CCTV monitoring and emergency response systems.",
        "1580582932707-520aed937b7b",
        "Directorate of Education, Delhi",
        Category.EDUCATION,
        Priority.MEDIUM,
        2,
    ),
    (
        180,
        "Smart Traffic Signals at 50 New Junctions",
        "AI-powered traffic management system reduces waiting time by 30%. Part of Smart City mission.",
        "1449824913935-59a10b8d2000",
        "Delhi Traffic Police",
        Category.INFRASTRUCTURE,
        Priority.LOW,
        2,
    ),
    (
        210,
        "Community Food Distribution Drive",
        "Local NGOs collaborate with MCD for weekly food distribution. "
        "Serving 500 families in need across 10 locations.",
        "1593113598332-cd288d649433",
        "Municipal Corporation of Delhi",
        Category.SOCIAL_WELFARE,
        Priority.LOW,
        2,
    ),
    (
        240,
        "Enhanced Security at Tourist Spots",
        "Additional police deployment at Red Fort, India Gate, and Lotus Temple. "
        "Tourist safety remains top priority.",
        "1523906834658-6e24ef2386f9",
        "Delhi Police",
        Category.SECURITY,
        Priority.MEDIUM,
        2,
    ),
]


def placeholder_news(now: Optional[datetime] = None) -> List[Article]:
    """
    Build the synthetic article set.

    Content is fixed; timestamps are "N minutes ago" relative to ``now``.
    """
    now = now or now_utc()
    today = f"{now.day} {now.strftime('%B %Y')}"

    return [
        Article(
            id=f"news_{i}",
            headline=headline,
            summary=summary.format(today=today),
            source=source,
            category=category,
            priority=priority,
            published_at=now - timedelta(minutes=minutes_ago),
            read_time_minutes=read_time,
            image_url=_IMAGE.format(image_id),
            location=PLACEHOLDER_LOCATION,
            is_synthetic=True,
        )
        for i, (minutes_ago, headline, summary, image_id, source, category, priority, read_time) in enumerate(
            _PLACEHOLDER_ROWS, start=1
        )
    ]
