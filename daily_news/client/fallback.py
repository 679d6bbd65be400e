from datetime import datetime, timezone
from typing import Dict, List

from daily_news.storage.models import NewsBundle

_UNSPLASH = "https://images.unsplash.com/photo-{}?auto=format&fit=crop&q=80&w=400"

_SAMPLE_NEWS: Dict[str, List[Dict]] = {
    "global": [
        {
            "category": "BREAKING",
            "headline": "Quantum Supremacy: Global Banking Protocol Breach Detected",
            "description": "Unprecedented anomalies detected across global financial networks. Intelligence agencies are investigating potential breaches in core cryptographic protocols. Immediate action is required to secure foundational digital assets across the hemisphere.",
            "thumbnail": _UNSPLASH.format("1639322537228-f710d846310a"),
            "viralScore": 9.8,
        },
        {
            "category": "POLITICS",
            "headline": "Mars Colony Charter Signed by 140 Nations",
            "description": "Leaders from 140 nations convened today to sign the historic Mars Colony Charter, establishing sovereignty rules and resource sharing agreements for extra-planetary settlements in the upcoming decade.",
            "thumbnail": _UNSPLASH.format("1614728263952-84ea256f9679"),
            "viralScore": 7.2,
        },
        {
            "category": "WORLD",
            "headline": "Arctic Digital Infrastructure Hub Announced",
            "description": "A coalition of tech giants has announced plans to build the largest cooling-efficient data center network in the Arctic circle, promising zero-emission computation power to support incoming AI loads.",
            "thumbnail": _UNSPLASH.format("1541888045-8c764ee7119f"),
            "viralScore": 6.5,
        },
        {
            "category": "BREAKING",
            "headline": "European Central Bank Transitions to Fully Digital Currency",
            "description": "The ECB has finalized its five-year transition, phasing out physical cash entirely. The new digital euro system utilizes advanced blockchain technology to ensure instant settlements and robust fraud protection.",
            "thumbnail": _UNSPLASH.format("1621504450181-5d356f153325"),
            "viralScore": 8.9,
        },
        {
            "category": "WORLD",
            "headline": "New Oceanic Clean-up Fleet Recovers 1 Million Tons of Plastic",
            "description": "The autonomous nautical drones deployed last year have hit a major milestone, clearing massive garbage patches in the Pacific and recycling the materials dynamically on board.",
            "thumbnail": _UNSPLASH.format("1594514578842-feae2d89ae83"),
            "viralScore": 8.1,
        },
    ],
    "tech": [
        {"category": "ECONOMY", "headline": "Kuala Lumpur Becomes Southeast Asia's Premier AI Hub", "viralScore": 8.5},
        {"category": "TECH", "headline": "Penang Semiconductor Corridor Announces Next-Gen Neural Chips", "viralScore": 6.9},
        {"category": "TECH", "headline": "OpenAI Releases GPT-5 with Multimodal Reasoning", "viralScore": 9.2},
    ],
    "ai": [
        {
            "category": "LIVE STREAM",
            "headline": "NVIDIA CEO Unveils 'Project Blackwell' - The Last Human-Designed Architecture?",
            "thumbnail": "https://i.ytimg.com/vi/pGU1W-F7oD0/hq720.jpg",
            "viralScore": 9.9,
            "viewers": "22.4K",
        },
        {
            "category": "SYNTHETIC MEDIA",
            "headline": "The Rise of AI YouTubers: Why Real Humans are Losing the Algorithm War",
            "thumbnail": "https://i.ytimg.com/vi/-OKcDp2H4eU/hq720.jpg",
            "viralScore": 8.1,
        },
        {
            "category": "AI",
            "headline": "Claude 4 Passes Medical Board Exam with 99.7% Accuracy",
            "thumbnail": "https://i.ytimg.com/vi/KldVQBAkjuo/hq720.jpg",
            "viralScore": 9.4,
        },
    ],
}


def get_sample_news() -> NewsBundle:
    """Dataset fixo exibido quando o servidor não responde. Timestamps = agora."""
    now = datetime.now(timezone.utc).isoformat()
    return NewsBundle.model_validate({
        bucket: [{**item, "timestamp": now, "url": "#"} for item in items]
        for bucket, items in _SAMPLE_NEWS.items()
    })
