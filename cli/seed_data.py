# cli/seed_data.py
"""Default industry catalogue used by ``site-api seed-industries``."""

DEFAULT_INDUSTRIES = [
    {
        "slug": "construction",
        "name": "Construction",
        "tagline": "Builders, renovators and project managers",
        "icon_name": "HardHat",
        "hero_headline": "AI that keeps your builds on schedule",
        "hero_subhead": "Quotes, variations and site paperwork handled in minutes.",
        "related_industries": ["trades", "real-estate"],
        "display_order": 1,
    },
    {
        "slug": "trades",
        "name": "Trades",
        "tagline": "Plumbers, electricians and other skilled trades",
        "icon_name": "Wrench",
        "hero_headline": "Spend less time on admin and more time on the tools",
        "hero_subhead": "Job scheduling, quoting and invoicing on autopilot.",
        "related_industries": ["construction", "professional-services"],
        "display_order": 2,
    },
    {
        "slug": "real-estate",
        "name": "Real Estate",
        "tagline": "Agencies, property managers and buyers' agents",
        "icon_name": "Home",
        "hero_headline": "Win more listings with AI-assisted follow-up",
        "hero_subhead": "Listing copy, tenant enquiries and reporting done for you.",
        "related_industries": ["construction", "professional-services"],
        "display_order": 3,
    },
    {
        "slug": "hospitality",
        "name": "Hospitality",
        "tagline": "Cafes, restaurants, bars and accommodation",
        "icon_name": "Coffee",
        "hero_headline": "Fill tables and rooms without the busywork",
        "hero_subhead": "Bookings, reviews and rosters managed in one place.",
        "related_industries": ["retail"],
        "display_order": 4,
    },
    {
        "slug": "retail",
        "name": "Retail",
        "tagline": "Shops, e-commerce and local service businesses",
        "icon_name": "ShoppingBag",
        "hero_headline": "Sell more with less effort",
        "hero_subhead": "Product descriptions, stock questions and customer replies automated.",
        "related_industries": ["hospitality"],
        "display_order": 5,
    },
    {
        "slug": "healthcare",
        "name": "Healthcare",
        "tagline": "Clinics, allied health and wellness practices",
        "icon_name": "Stethoscope",
        "hero_headline": "Give clinicians their time back",
        "hero_subhead": "Appointment reminders, intake forms and notes made simple.",
        "related_industries": ["professional-services"],
        "display_order": 6,
    },
    {
        "slug": "professional-services",
        "name": "Professional Services",
        "tagline": "Accountants, lawyers, consultants and agencies",
        "icon_name": "Briefcase",
        "hero_headline": "Deliver more client work without adding headcount",
        "hero_subhead": "Research, drafting and client communication accelerated by AI.",
        "related_industries": ["real-estate", "healthcare"],
        "display_order": 7,
    },
]
