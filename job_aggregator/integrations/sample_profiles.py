"""
Hand-curated contact sets used when the profile lookup cannot reach
live data. Each set has two recruiters, two hiring managers and two
employees.
"""

COMPANY_PROFILES = {
    "TRAC Recruiting": [
        ("Jennifer", "Martinez", "Senior Technical Recruiter", "Austin, TX", "recruiter", 18),
        ("Robert", "Kim", "Talent Acquisition Lead", "Remote", "recruiter", 24),
        ("Sarah", "Thompson", "Engineering Manager", "San Francisco, CA", "hiring_manager", 32),
        ("Michael", "Chen", "VP of Engineering", "Seattle, WA", "hiring_manager", 45),
        ("Emily", "Rodriguez", "Senior Software Engineer", "New York, NY", "employee", 12),
        ("David", "Wilson", "Product Manager", "Los Angeles, CA", "employee", 8),
    ],
    "RLDatix": [
        ("Lisa", "Anderson", "Healthcare IT Recruiter", "Chicago, IL", "recruiter", 15),
        ("James", "Brown", "Talent Acquisition Specialist", "Boston, MA", "recruiter", 22),
        ("Amanda", "Garcia", "Director of Engineering", "Denver, CO", "hiring_manager", 38),
        ("Christopher", "Lee", "VP of Product", "Portland, OR", "hiring_manager", 41),
        ("Jessica", "Taylor", "Healthcare Software Engineer", "Philadelphia, PA", "employee", 16),
        ("Matthew", "White", "Data Scientist", "Atlanta, GA", "employee", 11),
    ],
    "SpaceX": [
        ("Alexandra", "Johnson", "Aerospace Recruiter", "Hawthorne, CA", "recruiter", 28),
        ("Ryan", "Davis", "Engineering Talent Partner", "Austin, TX", "recruiter", 35),
        ("Maria", "Rodriguez", "Chief Engineer", "Cape Canaveral, FL", "hiring_manager", 52),
        ("Daniel", "Kim", "Director of Propulsion", "McGregor, TX", "hiring_manager", 47),
        ("Sophie", "Chen", "Rocket Propulsion Engineer", "Hawthorne, CA", "employee", 19),
        ("Ethan", "Wang", "Avionics Engineer", "Redmond, WA", "employee", 14),
    ],
    "Google": [
        ("Priya", "Patel", "Technical Recruiter", "Mountain View, CA", "recruiter", 42),
        ("Kevin", "Zhang", "Engineering Recruiter", "New York, NY", "recruiter", 38),
        ("Rachel", "Smith", "Engineering Director", "Seattle, WA", "hiring_manager", 67),
        ("Andrew", "Johnson", "VP of Engineering", "San Francisco, CA", "hiring_manager", 73),
        ("Nina", "Kumar", "Software Engineer", "Austin, TX", "employee", 25),
        ("Marcus", "Thompson", "Product Manager", "Cambridge, MA", "employee", 21),
    ],
    "Apple": [
        ("Isabella", "Garcia", "Design Recruiter", "Cupertino, CA", "recruiter", 31),
        ("Tyler", "Miller", "Hardware Recruiter", "Austin, TX", "recruiter", 27),
        ("Olivia", "Brown", "Design Director", "San Francisco, CA", "hiring_manager", 58),
        ("Benjamin", "Wilson", "VP of Hardware Engineering", "Cupertino, CA", "hiring_manager", 62),
        ("Grace", "Lee", "iOS Developer", "Seattle, WA", "employee", 18),
        ("Lucas", "Anderson", "UX Designer", "New York, NY", "employee", 23),
    ],
}

DEFAULT_PROFILES = [
    ("Sarah", "Johnson", "Senior Talent Acquisition Specialist", "San Francisco, CA", "recruiter", 12),
    ("Michael", "Chen", "Technical Recruiter & Talent Partner", "New York, NY", "recruiter", 8),
    ("Emily", "Rodriguez", "Engineering Manager & Technical Lead", "Seattle, WA", "hiring_manager", 15),
    ("David", "Kim", "Director of Product Management", "Austin, TX", "hiring_manager", 22),
    ("Lisa", "Thompson", "Senior Software Engineer", "Remote", "employee", 6),
    ("James", "Wilson", "Product Marketing Manager", "Los Angeles, CA", "employee", 9),
]


def profiles_for_company(company: str) -> list[tuple]:
    """Curated rows for a known company (case-insensitive), else the generic set."""
    wanted = (company or "").strip().lower()
    for name, rows in COMPANY_PROFILES.items():
        if name.lower() == wanted:
            return rows
    return DEFAULT_PROFILES
