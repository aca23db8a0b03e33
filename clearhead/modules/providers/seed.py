from decimal import Decimal

_WEEKDAY = ["09:00", "10:00", "11:00", "14:00", "15:00", "16:00"]
_AFTERNOON = ["10:00", "11:00", "14:00", "15:00", "16:00", "17:00"]
_ALL_DAY = ["09:00", "10:00", "11:00", "12:00", "13:00", "14:00", "15:00", "16:00", "17:00", "18:00"]
_LONG_DAY = ["08:00"] + _ALL_DAY + ["19:00"]

DEFAULT_PROVIDERS: list[dict] = [
    {
        "id": "therapist-1",
        "name": "Dr. Sarah Johnson",
        "title": "Licensed Clinical Psychologist",
        "type": "therapist",
        "email": "sarah.johnson@clearheadspace.com",
        "specialties": ["Anxiety", "Depression", "Relationships"],
        "bio": "Dr. Johnson has over 10 years of experience helping individuals navigate life's challenges with compassion and evidence-based approaches.",
        "rating": 4.9,
        "hourly_rate": Decimal("120"),
        "availability": {
            "monday": _WEEKDAY, "tuesday": _WEEKDAY, "wednesday": _WEEKDAY, "thursday": _WEEKDAY,
            "friday": _WEEKDAY[:5],
            "saturday": ["10:00", "11:00", "12:00"],
            "sunday": [],
        },
    },
    {
        "id": "therapist-2",
        "name": "Michael Chen",
        "title": "Licensed Marriage & Family Therapist",
        "type": "therapist",
        "email": "michael.chen@clearheadspace.com",
        "specialties": ["Couples Therapy", "Family Dynamics", "Communication"],
        "bio": "Michael specializes in helping couples and families build stronger, more connected relationships through understanding and effective communication.",
        "rating": 4.8,
        "hourly_rate": Decimal("110"),
        "availability": {
            "monday": _AFTERNOON, "tuesday": _AFTERNOON, "wednesday": _AFTERNOON, "thursday": _AFTERNOON,
            "friday": _AFTERNOON[:5],
            "saturday": ["09:00", "10:00", "11:00", "12:00"],
            "sunday": ["14:00", "15:00", "16:00"],
        },
    },
    {
        "id": "buddy-1",
        "name": "Emma Rodriguez",
        "title": "Peer Support Specialist",
        "type": "buddy",
        "email": "emma.rodriguez@clearheadspace.com",
        "specialties": ["Life Transitions", "Stress Management", "Mindfulness"],
        "bio": "Emma is a warm and empathetic listener who provides peer support and guidance for those seeking a friendly ear and practical advice.",
        "rating": 4.7,
        "hourly_rate": Decimal("60"),
        "availability": {
            "monday": _ALL_DAY, "tuesday": _ALL_DAY, "wednesday": _ALL_DAY, "thursday": _ALL_DAY, "friday": _ALL_DAY,
            "saturday": _ALL_DAY[1:9],
            "sunday": _ALL_DAY[3:],
        },
    },
    {
        "id": "buddy-2",
        "name": "Alex Thompson",
        "title": "Life Coach & Wellness Buddy",
        "type": "buddy",
        "email": "alex.thompson@clearheadspace.com",
        "specialties": ["Goal Setting", "Motivation", "Self-Care"],
        "bio": "Alex helps individuals discover their inner strength and develop practical strategies for personal growth and well-being.",
        "rating": 4.6,
        "hourly_rate": Decimal("50"),
        "availability": {
            "monday": _LONG_DAY, "tuesday": _LONG_DAY, "wednesday": _LONG_DAY, "thursday": _LONG_DAY,
            "friday": _LONG_DAY[:-1],
            "saturday": _ALL_DAY,
            "sunday": _ALL_DAY[1:],
        },
    },
]
